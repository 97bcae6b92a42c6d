import argparse
import os
import sys

from .compiler import CompileResult
from .lexer    import Lexer
from .parser   import Parser
from .reporter import Reporter

class Tools:
    def __init__(self, stdout = None, stderr = None):
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def parseargs(self, argv = None):
        """
        return the input file name and the dump flags
        """
        parser = argparse.ArgumentParser(
            prog        = os.path.basename(sys.argv[0]),
            description = "An interpreter for a toy assignment language.",
        )

        parser.add_argument('input', help = 'source file')
        parser.add_argument('-t', '--print-tokens', action = 'store_true',
                            help = 'print the lexed tokens of the source file')
        parser.add_argument('-a', '--print-ast', action = 'store_true',
                            help = 'print the AST of the source file')

        return parser.parse_args(argv)

    def readsource(self, filename):
        """
        file contents, or None once the failure has been printed
        """
        try:
            with open(filename, "r") as stream:
                return stream.read()

        except OSError as e:
            print(f"cannot read input file {filename}: {e}", file = self.stderr)
            return None

    def dump_tokens(self, source):
        print("The lexed tokens of the program are:", file = self.stdout)
        for token in Lexer().significant(source):
            print(f"  {token.pprint(source)}", file = self.stdout)

    def dump_ast(self, source):
        # a throwaway reporter: the real run reports its own diagnostics
        program = Parser(Reporter(source = source)).parse(source)
        print("The AST of the program is:", file = self.stdout)
        for assignment in program:
            print(f"  {assignment.pprint()}", file = self.stdout)

    def report(self, result: CompileResult):
        """
        print the outcome of a run, return the exit status
        """
        if result.diagnostics:
            print(f"The program has {len(result.diagnostics)} error(s):\n", file = self.stderr)
            print(result.pprint(), end = "", file = self.stderr)
            return 1

        print("The result of the program is:\n", file = self.stdout)
        print(result.pprint(), end = "", file = self.stdout)
        return 0
