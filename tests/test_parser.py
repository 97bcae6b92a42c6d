from unittest import TestCase, main

from toy.expression import BinaryOperation, Name, Number, UnaryOperation
from toy.compiler import compile
from toy.lexer import TokenKind
from toy.parser import MAX_DEPTH, Parser
from toy.reporter import DiagnosticKind, Reporter


def parse(source):
    reporter = Reporter(source)
    program = Parser(reporter).parse(source)
    return program, reporter.diagnostics


def positions(diagnostics):
    return [(d.line, d.column) for d in diagnostics]


class TestParsingWellFormed(TestCase):
    def test_empty_program(self) -> None:
        program, errors = parse("  \n ")
        self.assertEqual(0, len(program))
        self.assertEqual([], errors)

    def test_single_assignment(self) -> None:
        program, errors = parse("x = 42;")
        self.assertEqual([], errors)
        [assignment] = program
        self.assertEqual("x", assignment.name)
        self.assertEqual(TokenKind.IDENTIFIER, assignment.token.kind)
        self.assertIsInstance(assignment.value, Number)
        self.assertEqual(42, assignment.value.value)

    def test_assignments_keep_source_order(self) -> None:
        program, _ = parse("c = 1; a = 2; b = c;")
        self.assertEqual(["c", "a", "b"], [a.name for a in program])

    def test_multiplication_binds_tighter(self) -> None:
        program, _ = parse("a = 2 + 3 * 4;")
        self.assertEqual("a = (2 + (3 * 4));", program.assignments[0].pprint())

    def test_operators_are_left_associative(self) -> None:
        program, _ = parse("a = 1 - 2 - 3; b = 1 * 2 * 3;")
        self.assertEqual(["a = ((1 - 2) - 3);", "b = ((1 * 2) * 3);"],
                         [a.pprint() for a in program])

    def test_parentheses_group(self) -> None:
        program, _ = parse("a = (1 + 2) * x;")
        value = program.assignments[0].value
        self.assertIsInstance(value, BinaryOperation)
        self.assertEqual("*", value.operator)
        self.assertIsInstance(value.right, Name)
        self.assertEqual("((1 + 2) * x)", value.pprint())

    def test_unary_operators_chain(self) -> None:
        program, errors = parse("a = - - 5; b = +-(2+3);")
        self.assertEqual([], errors)
        first = program.assignments[0].value
        self.assertIsInstance(first, UnaryOperation)
        self.assertIsInstance(first.right, UnaryOperation)
        self.assertEqual("(-(-5))", first.pprint())
        self.assertEqual("(+(-(2 + 3)))", program.assignments[1].value.pprint())

    def test_operator_nodes_keep_their_token(self) -> None:
        source = "a = 1 +\n 2;"
        program, _ = parse(source)
        value = program.assignments[0].value
        self.assertEqual(TokenKind.PLUS, value.token.kind)
        self.assertEqual(1, value.line)
        self.assertEqual(2, value.right.line)

    def test_zero_is_a_literal(self) -> None:
        program, errors = parse("a = 0;")
        self.assertEqual([], errors)
        self.assertEqual(0, program.assignments[0].value.value)

    def test_long_chains_do_not_recurse(self) -> None:
        source = "a = " + " + ".join(["1"] * 5000) + ";"
        program, errors = parse(source)
        self.assertEqual([], errors)
        self.assertEqual(1, len(program))
        self.assertEqual({"a": 5000}, compile(source).bindings)

    def test_long_products_and_differences(self) -> None:
        self.assertEqual({"a": 1}, compile("a = " + " * ".join(["1"] * 3000) + ";").bindings)
        self.assertEqual({"a": -2998}, compile("a = " + " - ".join(["1"] * 3000) + ";").bindings)

    def test_long_chains_print(self) -> None:
        program, _ = parse("a = " + " + ".join(["1"] * 3000) + ";")
        text = program.assignments[0].value.pprint()
        self.assertTrue(text.startswith("(" * 2999 + "1 + 1)"))

    def test_long_unary_runs(self) -> None:
        program, errors = parse("a = " + "-" * 1200 + "1;")
        self.assertEqual([], errors)
        value = program.assignments[0].value
        self.assertIsInstance(value, UnaryOperation)
        self.assertEqual("-", value.operator)
        self.assertEqual({"a": 1, "b": -1},
                         compile("a = " + "-" * 1200 + "1; b = " + "-" * 1201 + "1;").bindings)

    def test_nesting_up_to_the_limit(self) -> None:
        source = "a = " + "(" * MAX_DEPTH + "1" + ")" * MAX_DEPTH + ";"
        self.assertEqual({"a": 1}, compile(source).bindings)

    def test_parsing_is_deterministic(self) -> None:
        source = "a = 1; b = a * (2 - -a);"
        self.assertEqual(parse(source), parse(source))


class TestParsingErrors(TestCase):
    def test_recovery_scenario(self) -> None:
        source = "bbb = 6;\naaa =\n;\nccc = ;\nfoo = 6"
        program, errors = parse(source)
        self.assertEqual([(3, 1), (4, 7), (5, 8)], positions(errors))
        self.assertEqual(
            "expected either `+`, `-`, `(`, an `Identifier`, or a `Literal`, "
            "but found `;` (`Semicolon`)", errors[0].message)
        self.assertEqual(errors[0].message, errors[1].message)
        self.assertEqual(
            "expected a `Semicolon` after `6`, but found `` (`EndOfFile`)", errors[2].message)
        self.assertEqual(["bbb"], [a.name for a in program])

    def test_recovery_scenario_with_trailing_newline(self) -> None:
        _, errors = parse("bbb = 6;\naaa =\n;\nccc = ;\nfoo = 6\n")
        self.assertEqual([(3, 1), (4, 7), (5, 8)], positions(errors))

    def test_missing_equal(self) -> None:
        program, errors = parse("a 5;\nb = 1;")
        self.assertEqual([(1, 3)], positions(errors))
        self.assertEqual("expected an `Equal` after `a`, but found `5` (`Literal`)",
                         errors[0].message)
        self.assertEqual(["b"], [a.name for a in program])

    def test_missing_identifier(self) -> None:
        program, errors = parse("= 5;\nb = 1;")
        self.assertEqual([(1, 1)], positions(errors))
        self.assertEqual("expected an `Identifier` at the start of an assignment, "
                         "but found `=` (`Equal`)", errors[0].message)
        self.assertEqual(["b"], [a.name for a in program])

    def test_missing_right_paren(self) -> None:
        _, errors = parse("a = (1 + 2;")
        self.assertEqual([(1, 11)], positions(errors))
        self.assertEqual("expected a `RightParen` after `2`, but found `;` (`Semicolon`)",
                         errors[0].message)

    def test_leading_zero_is_rejected(self) -> None:
        program, errors = parse("a = 007;\nb = 0;")
        self.assertEqual([(1, 5)], positions(errors))
        self.assertEqual("the integer, `007`, is invalid. literals must be either 0 "
                         "or non-zero digits.", errors[0].message)
        self.assertEqual(["b"], [a.name for a in program])

    def test_unknown_token_in_expression(self) -> None:
        _, errors = parse("a = $;")
        self.assertEqual(1, len(errors))
        self.assertTrue(errors[0].message.endswith("but found `$` (`Unknown`)"))

    def test_every_statement_reports(self) -> None:
        _, errors = parse("a = ;\nb = *;\nc = 1 1;\n")
        self.assertEqual([(1, 5), (2, 5), (3, 6)], positions(errors))

    def test_garbage_terminates(self) -> None:
        _, errors = parse(") ) ( = = ; ; 1 2 * )")
        self.assertTrue(errors)

    def test_spans_point_into_the_source(self) -> None:
        source = "a = ;"
        _, errors = parse(source)
        start, end = errors[0].span
        self.assertEqual(";", source[start:end])

    def test_kinds_of_parse_errors(self) -> None:
        _, errors = parse("= 1;\na 1;\nb = ;\nc = 1\nd = (1;\ne = 01;\n")
        self.assertEqual(
            [DiagnosticKind.MISSING_IDENTIFIER, DiagnosticKind.MISSING_EQUALS,
             DiagnosticKind.UNEXPECTED_TOKEN, DiagnosticKind.MISSING_SEMICOLON,
             DiagnosticKind.UNEXPECTED_TOKEN, DiagnosticKind.INVALID_LITERAL],
            [e.kind for e in errors])

    def test_nesting_too_deep(self) -> None:
        source = "a = " + "(" * 400 + "1" + ")" * 400 + ";\nb = 2;"
        program, errors = parse(source)
        self.assertEqual([DiagnosticKind.NESTING_TOO_DEEP], [e.kind for e in errors])
        self.assertEqual((1, 5 + MAX_DEPTH), (errors[0].line, errors[0].column))
        self.assertEqual(["b"], [a.name for a in program])

    def test_nesting_under_unary_runs(self) -> None:
        _, errors = parse("a = " + "-(" * 400 + "1" + ")" * 400 + ";")
        self.assertEqual([DiagnosticKind.NESTING_TOO_DEEP], [e.kind for e in errors])

    def test_huge_literal_is_left_to_evaluation(self) -> None:
        program, errors = parse("a = " + "9" * 5000 + ";")
        self.assertEqual([], errors)
        self.assertIsNone(program.assignments[0].value.value)


class TestParsingAmbiguity(TestCase):
    def test_identifier_after_expression_starts_a_new_assignment(self) -> None:
        program, errors = parse("a = b c = 1;")
        self.assertEqual(1, len(errors))
        self.assertEqual("expected a `Semicolon` after `b`, but found `c` (`Identifier`)",
                         errors[0].message)
        self.assertEqual((1, 6), (errors[0].line, errors[0].column))
        self.assertEqual(["c"], [a.name for a in program])

    def test_missing_equal_resumes_at_the_next_identifier(self) -> None:
        program, errors = parse("a b = 5;")
        self.assertEqual(1, len(errors))
        self.assertEqual(["b"], [a.name for a in program])

    def test_begins_assignment_decision(self) -> None:
        source = "a = 1;"
        reporter = Reporter(source)
        parser = Parser(reporter)
        parser.parse(source)
        identifier, equal, *_ = parser.tokens
        self.assertTrue(parser.begins_assignment(identifier))
        self.assertFalse(parser.begins_assignment(equal))


if __name__ == "__main__":
    main()
