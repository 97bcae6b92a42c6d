import dataclasses as dc
import enum

from typing import Optional as Opt

from .lexer import column

### DIAGNOSTICS ###

# diagnostics are plain data, never raised
# both the parser and the evaluator log them into one Reporter,
# which keeps them in order of detection

class DiagnosticKind(enum.Enum):
    # lexing
    INVALID_TOKEN           = "InvalidToken"
    # parsing
    UNEXPECTED_TOKEN        = "UnexpectedToken"
    MISSING_SEMICOLON       = "MissingSemicolon"
    MISSING_EQUALS          = "MissingEquals"
    MISSING_IDENTIFIER      = "MissingIdentifier"
    INVALID_LITERAL         = "InvalidLiteral"
    NESTING_TOO_DEEP        = "NestingTooDeep"
    # evaluation
    UNINITIALIZED_VARIABLE  = "UninitializedVariable"
    INTEGER_OVERFLOW        = "IntegerOverflow"

    def pprint(self):
        return self.value

@dc.dataclass(frozen = True)
class Diagnostic:
    message     : str
    line        : int
    column      : int
    span        : Opt[tuple[int, int]]   = None
    kind        : Opt[DiagnosticKind]    = None

    def pprint(self, label):
        return f"{label}:{self.line}:{self.column}\n      {self.message}\n"

class InternalError(Exception):
    """
    an impossible state inside the pipeline, never a problem with the input
    """

class Reporter():
    """
    report errors
    """
    def __init__(self, source = ""):
        self.source      = source
        self.diagnostics = []
        self.section     = None

    def __bool__(self):
        return len(self.diagnostics) != 0

    def __len__(self):
        return len(self.diagnostics)

    def at(self, token, message, kind = None):
        """
        a diagnostic pointing at the first character of `token`
        """
        return Diagnostic(
            message     = message,
            line        = token.line,
            column      = column(self.source, token.start),
            span        = (token.start, token.end),
            kind        = kind,
        )

    def after(self, token, message, kind = None):
        """
        a diagnostic pointing just past the last character of `token`
        """
        return Diagnostic(
            message     = message,
            line        = token.line,
            column      = column(self.source, token.start) + token.end - token.start,
            span        = (token.end, token.end),
            kind        = kind,
        )

    def report(self, token, message, kind = None):
        self.log(self.at(token, message, kind))

    def crash(self, errstr):
        errstr = f"{{{self.section}}} \t| " + errstr if self.section else errstr
        raise InternalError(errstr)

    def log(self, diagnostic):
        match diagnostic:
            case Diagnostic():
                self.diagnostics.append(diagnostic)
            case None:
                pass
            case _:
                for diag in diagnostic:
                    self.log(diag)

    def checkpoint(self, section = None):
        """
        enter the next stage; false if an earlier stage left diagnostics behind
        """
        self.section = section
        return not self.diagnostics

    def render(self, label):
        return "\n".join(f"{index:>2}) {diag.pprint(label)}"
                         for index, diag in enumerate(self.diagnostics, 1))
