import dataclasses as dc

from typing import Optional as Opt

from .lexer    import Lexer, TokenKind
from .parser   import Parser
from .reporter import Diagnostic, DiagnosticKind, Reporter

### PIPELINE ###

# lexing -> parsing -> evaluation, each stage behind a reporter checkpoint
# a stage only runs when the ones before it left no diagnostics
# every call works on its own reporter, lexer and environment

@dc.dataclass
class CompileResult:
    diagnostics : list[Diagnostic]
    bindings    : Opt[dict[str, int]] = None
    label       : str                 = "<input>"

    def __bool__(self):
        return not self.diagnostics

    def pprint(self):
        if self.diagnostics:
            reporter = Reporter()
            reporter.log(self.diagnostics)
            return reporter.render(self.label)

        return "".join(f"{name} = {value}\n" for name, value in self.bindings.items())

def invalid_tokens(source, tokens, reporter):
    for token in tokens:
        if token.kind is TokenKind.UNKNOWN:
            reporter.report(token, f"the token, `{token.lexeme(source)}`, is invalid.",
                            DiagnosticKind.INVALID_TOKEN)

def compile(source: str, file_label: str = "<input>") -> CompileResult:
    """
    run `source` through the whole pipeline

    `file_label` only names the input in rendered diagnostics
    """
    reporter = Reporter(source = source)

    def failed():
        return CompileResult(list(reporter.diagnostics), label = file_label)

    reporter.checkpoint("lexing")
    invalid_tokens(source, Lexer().tokenize(source), reporter)

    if not reporter.checkpoint("parsing"):
        return failed()
    program = Parser(reporter).parse(source)

    if not reporter.checkpoint("evaluation"):
        return failed()
    bindings = program.evaluate(reporter)

    if not reporter.checkpoint("end"):
        return failed()
    return CompileResult([], bindings, label = file_label)
