import dataclasses as dc

from .lexer import Token

### AST CLASS ###

# Assignment and Expression Objects for ast
# each node owns its children and keeps the token it came from for diagnostics
# two transformers:
# evaluate() -> int | None, logging diagnostics into the reporter
# pprint() -> str for display

@dc.dataclass
class AST:
    token       : Token

    @property
    def line(self):
        return self.token.line

    def pprint(self):
        return "base ast"

    def evaluate(self, environment, reporter):
        reporter.crash(f"evaluating a base ast: {self.pprint()}")
