from .lexer      import Lexer, Token, TokenKind
from .reporter   import Diagnostic, DiagnosticKind, Reporter
from .expression import BinaryOperation, Expression, Name, Number, UnaryOperation
from .statement  import Assignment
from .program    import Program

# Program    := Assignment*
# Assignment := Identifier '=' Exp ';'
# Exp        := Term (('+'|'-') Term)*
# Term       := Fact ('*' Fact)*
# Fact       := '(' Exp ')' | ('-'|'+') Fact | Literal | Identifier
#
# one token of lookahead, no backtracking
# on error: log, then skip to a `;` (eaten), an identifier or the end of file
# parentheses are the only construct parsed by recursion, so their depth is capped

MAX_DEPTH = 100

class ParseError(Exception):
    def __init__(self, diagnostic: Diagnostic):
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic

class Parser:
    def __init__(self, reporter: Reporter):
        self.reporter   = reporter
        self.lexer      = Lexer()
        self.source     = ""
        self.tokens     = []
        self.pos        = 0
        self.depth      = 0

    def parse(self, source: str) -> Program:
        self.source     = source
        self.tokens     = self.lexer.significant(source)
        self.pos        = 0
        self.depth      = 0

        # diagnostics are positioned against the text being parsed
        self.reporter.source = source

        return self.p_program()

    ### decisions ###

    def begins_assignment(self, token: Token) -> bool:
        """
        whether `token` is taken as the start of a new assignment

        chained assignments are not in the grammar and the parser never
        backtracks, so in `a = b c = 1;` the identifier `c` always starts
        a new statement and the missing `;` is blamed on `b`
        """
        return token.kind is TokenKind.IDENTIFIER

    ### nonterminals ###

    def p_program(self):
        program = Program()

        while self.current.kind is not TokenKind.END_OF_FILE:
            start = self.pos
            try:
                program.assignments.append(self.p_assignment())
            except ParseError as e:
                self.reporter.log(e.diagnostic)
                self.synchronize(start)

        return program

    def p_assignment(self):
        name = self.current
        if name.kind is not TokenKind.IDENTIFIER:
            raise self.error_at(name, "expected an `Identifier` at the start "
                                      f"of an assignment, but found {self.found()}",
                                DiagnosticKind.MISSING_IDENTIFIER)
        self.advance()

        if self.current.kind is not TokenKind.EQUAL:
            raise self.error_at(self.current, f"expected an `Equal` after "
                                              f"`{self.lexeme(name)}`, but found {self.found()}",
                                DiagnosticKind.MISSING_EQUALS)
        self.advance()

        value = self.p_exp()

        if self.current.kind is not TokenKind.SEMICOLON:
            raise self.error_after(self.previous, f"expected a `Semicolon` after "
                                                  f"`{self.lexeme(self.previous)}`, "
                                                  f"but found {self.found()}",
                                   DiagnosticKind.MISSING_SEMICOLON)
        self.advance()

        return Assignment(
            name    = self.lexeme(name),
            value   = value,
            token   = name,
        )

    def p_exp(self) -> Expression:
        left = self.p_term()

        while self.current.kind in (TokenKind.PLUS, TokenKind.MINUS):
            op    = self.advance()
            right = self.p_term()
            left  = BinaryOperation(
                operator    = self.lexeme(op),
                left        = left,
                right       = right,
                token       = op,
            )

        return left

    def p_term(self) -> Expression:
        left = self.p_fact()

        while self.current.kind is TokenKind.STAR:
            op    = self.advance()
            right = self.p_fact()
            left  = BinaryOperation(
                operator    = self.lexeme(op),
                left        = left,
                right       = right,
                token       = op,
            )

        return left

    def p_fact(self) -> Expression:
        # a run of prefix signs is read in a loop and wrapped innermost first
        signs = []
        while self.current.kind in (TokenKind.PLUS, TokenKind.MINUS):
            signs.append(self.advance())

        fact = self.p_operand()
        for sign in reversed(signs):
            fact = UnaryOperation(
                operator    = self.lexeme(sign),
                right       = fact,
                token       = sign,
            )
        return fact

    def p_operand(self) -> Expression:
        token = self.current

        match token.kind:
            case TokenKind.LEFT_PAREN:
                if self.depth >= MAX_DEPTH:
                    raise self.error_at(token, f"expression nested too deeply: more than "
                                               f"{MAX_DEPTH} levels of parentheses",
                                        DiagnosticKind.NESTING_TOO_DEEP)
                self.advance()

                self.depth += 1
                try:
                    inner = self.p_exp()
                finally:
                    self.depth -= 1

                if self.current.kind is not TokenKind.RIGHT_PAREN:
                    raise self.error_after(self.previous, f"expected a `RightParen` after "
                                                          f"`{self.lexeme(self.previous)}`, "
                                                          f"but found {self.found()}",
                                           DiagnosticKind.UNEXPECTED_TOKEN)
                self.advance()
                return inner

            case TokenKind.LITERAL:
                return self.p_number()

            case TokenKind.IDENTIFIER:
                self.advance()
                return Name(
                    name        = self.lexeme(token),
                    token       = token,
                )

            case _:
                raise self.error_at(token, "expected either `+`, `-`, `(`, an `Identifier`, "
                                           f"or a `Literal`, but found {self.found()}",
                                    DiagnosticKind.UNEXPECTED_TOKEN)

    def p_number(self) -> Number:
        token = self.current
        if token.kind is not TokenKind.LITERAL:
            self.reporter.crash(f"p_number called on {token.kind.pprint()}")

        text = self.lexeme(token)
        if len(text) > 1 and text.startswith("0"):
            raise self.error_at(token, f"the integer, `{text}`, is invalid. "
                                       "literals must be either 0 or non-zero digits.",
                                DiagnosticKind.INVALID_LITERAL)
        self.advance()

        return Number.of_text(text, token)

    ### recovery ###

    def synchronize(self, start):
        """
        panic mode: drop tokens up to the next safe point, always moving
        past the position the failed assignment started at
        """
        while True:
            token = self.current

            if token.kind is TokenKind.END_OF_FILE:
                return

            if token.kind is TokenKind.SEMICOLON:
                self.advance()
                return

            if self.pos > start and self.begins_assignment(token):
                return

            self.advance()

    ### token stream ###

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    @property
    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def advance(self) -> Token:
        token = self.current
        if token.kind is not TokenKind.END_OF_FILE:
            self.pos += 1
        return token

    def lexeme(self, token):
        return token.lexeme(self.source)

    def found(self):
        return f"`{self.lexeme(self.current)}` (`{self.current.kind.pprint()}`)"

    def error_at(self, token, message, kind):
        return ParseError(self.reporter.at(token, message, kind))

    def error_after(self, token, message, kind):
        return ParseError(self.reporter.after(token, message, kind))
