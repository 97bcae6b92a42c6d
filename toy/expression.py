import dataclasses as dc
import operator

from typing import Optional as Opt

from .ast      import AST
from .reporter import DiagnosticKind

### EXPRESSIONS ###

# types of expressions:
# number, name
# binary operation, unary operation
# evaluate() -> int | None, None when a diagnostic was logged on the way
# values are signed 64-bit integers, anything outside is reported as an overflow
# operator chains (`1 + 2 + ...`, `- - ...`) can be arbitrarily long:
# they are walked in a loop, never one call per operator

INT_MIN = -(1 << 63)
INT_MAX = (1 << 63) - 1

# literals never have leading zeros, so a longer digit run cannot fit
INT_DIGITS = len(str(INT_MAX))

def fits(value):
    return INT_MIN <= value <= INT_MAX

def overflow(reporter, node):
    reporter.report(node.token, f"integer overflow in `{node.operator}`",
                    DiagnosticKind.INTEGER_OVERFLOW)

@dc.dataclass
class Expression(AST):
    pass

@dc.dataclass
class Number(Expression):
    text        : str
    value       : Opt[int] = None

    @staticmethod
    def of_text(text, token):
        """
        None stands for a digit run too long to ever fit
        """
        return Number(
            text    = text,
            value   = int(text) if len(text) <= INT_DIGITS else None,
            token   = token,
        )

    def pprint(self):
        return self.text

    def evaluate(self, environment, reporter):
        if self.value is None or not fits(self.value):
            reporter.report(self.token,
                            f"integer literal `{self.text}` does not fit "
                            f"in a 64-bit signed integer",
                            DiagnosticKind.INTEGER_OVERFLOW)
            return None
        return self.value

@dc.dataclass
class Name(Expression):
    name        : str

    def pprint(self):
        return self.name

    def evaluate(self, environment, reporter):
        if self.name not in environment:
            reporter.report(self.token, f"uninitialized variable `{self.name}`",
                            DiagnosticKind.UNINITIALIZED_VARIABLE)
            return None
        return environment[self.name]

@dc.dataclass
class BinaryOperation(Expression):
    operator    : str
    left        : Expression
    right       : Expression

    def spine(self):
        """
        the operations down the left edge, innermost first, and the operand at its bottom
        """
        nodes = []
        node  = self
        while isinstance(node, BinaryOperation):
            nodes.append(node)
            node = node.left
        return nodes[::-1], node

    def pprint(self):
        nodes, bottom = self.spine()
        text = bottom.pprint()
        for node in nodes:
            text = f"({text} {node.operator} {node.right.pprint()})"
        return text

    def evaluate(self, environment, reporter):
        nodes, bottom = self.spine()

        # every operand is evaluated, so every uninitialized name gets reported
        x = bottom.evaluate(environment, reporter)
        for node in nodes:
            y = node.right.evaluate(environment, reporter)
            if x is None or y is None:
                x = None
                continue

            if node.operator not in bin_ops:
                reporter.crash(f"unknown binary operator {{{node.operator}}}")

            x = bin_ops[node.operator](x, y)
            if not fits(x):
                overflow(reporter, node)
                x = None
        return x

@dc.dataclass
class UnaryOperation(Expression):
    operator    : str
    right       : Expression

    def spine(self):
        """
        the operations down the chain, innermost first, and their operand
        """
        nodes = []
        node  = self
        while isinstance(node, UnaryOperation):
            nodes.append(node)
            node = node.right
        return nodes[::-1], node

    def pprint(self):
        nodes, operand = self.spine()
        text = operand.pprint()
        for node in nodes:
            text = f"({node.operator}{text})"
        return text

    def evaluate(self, environment, reporter):
        nodes, operand = self.spine()

        x = operand.evaluate(environment, reporter)
        for node in nodes:
            if x is None:
                return None

            if node.operator not in un_ops:
                reporter.crash(f"unknown unary operator {{{node.operator}}}")

            x = un_ops[node.operator](x)
            if not fits(x):
                overflow(reporter, node)
                return None
        return x

bin_ops = {
        '+'     :   operator.add,
        '-'     :   operator.sub,
        '*'     :   operator.mul,
        }
un_ops = {
        '+'     :   operator.pos,
        '-'     :   operator.neg,
        }
