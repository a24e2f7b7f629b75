from typing import List

import rply

from tacrv.parsing.driver import ActionObserver
from tacrv.parsing.table import Production


class ProductionCollector(ActionObserver):
    """Records every reduced production, in the order the driver applied them."""

    def __init__(self):
        self.productions: List[Production] = []

    def when_shift(self, state: int, token: rply.Token):
        pass

    def when_reduce(self, state: int, production: Production):
        self.productions.append(production)

    def when_accept(self, state: int):
        pass

    def dump_lines(self) -> List[str]:
        return [str(p) for p in self.productions]
