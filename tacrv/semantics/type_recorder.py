from typing import List

import rply

from tacrv.parsing import grammar
from tacrv.parsing.driver import ActionObserver
from tacrv.parsing.table import Production
from tacrv.semantics.symtab import SourceCodeType


class TypeRecorder(ActionObserver):
    """
    Writes the declared type of every `int x` into the symbol table.

    The symbol stack mirrors the parse stack: a shift pushes the token, a
    reduce pops one entry per body symbol and pushes the value synthesized for
    the production's head (`None` for heads that carry nothing).
    """

    def __init__(self):
        self.symbols: List[object] = []

    def when_shift(self, state: int, token: rply.Token):
        self.symbols.append(token)

    def when_reduce(self, state: int, production: Production):
        body = self.pop(len(production.body))
        synthesized = None

        if production.index == grammar.INT_TYPE:
            synthesized = SourceCodeType.INT
        elif production.index == grammar.DECLARATION:
            decl_type, ident = body
            self.symbol_table.get(ident.getstr()).set_type(decl_type)

        self.symbols.append(synthesized)

    def when_accept(self, state: int):
        self.symbols.clear()

    def pop(self, n: int) -> list:
        if n == 0:
            return []
        body = self.symbols[-n:]
        del self.symbols[-n:]
        return body
