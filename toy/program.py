import dataclasses as dc

from .statement import Assignment
from .reporter  import Reporter

### PROGRAM CLASS ###

# holds the assignments in source order
# evaluate() runs them against a fresh environment
# a failed assignment leaves the environment untouched, the following ones still run
# bindings come back in first-assignment order: overwriting a name keeps its place

@dc.dataclass
class Program:
    assignments : list[Assignment] = dc.field(default_factory = list)

    def __iter__(self):
        return iter(self.assignments)

    def __len__(self):
        return len(self.assignments)

    def pprint(self):
        return "\n".join(assignment.pprint() for assignment in self.assignments)

    def evaluate(self, reporter: Reporter) -> dict[str, int]:
        environment = dict()

        for assignment in self.assignments:
            assignment.evaluate(environment, reporter)

        return environment
