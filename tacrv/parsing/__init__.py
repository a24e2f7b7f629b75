from typing import List

from tacrv.semantics import symtab
from . import lexer
from . import grammar
from . import driver


def parse(src_text: str, observers: List[driver.ActionObserver], symbol_table: symtab.SymbolTable = None) -> symtab.SymbolTable:
    """
    Scans and parses `src_text`, reporting every parse event to `observers`.
    Returns the symbol table the scanner and observers filled in.
    """
    symbol_table = symtab.SymbolTable() if symbol_table is None else symbol_table
    tokens = lexer.scan(src_text, symbol_table)
    parser = driver.ParseDriver(grammar.table, symbol_table)
    for observer in observers:
        parser.register_observer(observer)
    parser.run(tokens)
    return symbol_table
