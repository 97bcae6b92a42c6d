import dataclasses as dc

from .ast        import AST
from .expression import Expression

### STATEMENTS ###

# the language has a single statement: `name = value;`
# token is the identifier being assigned, for diagnostics
# evaluate() updates the environment only when the value could be computed

@dc.dataclass
class Assignment(AST):
    name        : str
    value       : Expression

    def pprint(self):
        return f"{self.name} = {self.value.pprint()};"

    def evaluate(self, environment, reporter):
        result = self.value.evaluate(environment, reporter)
        if result is not None:
            environment[self.name] = result
        return result
