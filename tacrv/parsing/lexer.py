from typing import List

import rply
from rply.token import SourcePosition

from tacrv.semantics import symtab

END = "$end"

lg = rply.lexergenerator.LexerGenerator()

# Keywords must come before ID: rply takes the first rule that matches.
lg.add("INT", r"int\b")
lg.add("RETURN", r"return\b")

lg.add("ID", r"[a-zA-Z_][a-zA-Z0-9_]*")
lg.add("INT_CONST", r"\d+")

lg.add("ASSIGN", r"=")
lg.add("PLUS", r"\+")
lg.add("MINUS", r"-")
lg.add("STAR", r"\*")

lg.add("LPAREN", r"\(")
lg.add("RPAREN", r"\)")
lg.add("SEMICOLON", r";")

lg.ignore(r"\s+")

lexer = lg.build()
all_tokens = [rule.name for rule in lexer.rules]


def end_marker(src_text: str) -> rply.Token:
    lineno = src_text.count("\n") + 1
    colno = len(src_text) - src_text.rfind("\n")
    return rply.Token(END, END, SourcePosition(len(src_text), lineno, colno))


def scan(src_text: str, symbol_table: symtab.SymbolTable) -> List[rply.Token]:
    """
    Tokenizes `src_text`, registering every identifier in `symbol_table` the
    first time it is seen. The returned list always ends with an `$end`
    token.
    """
    tokens = []
    for token in lexer.lex(src_text):
        if token.gettokentype() == "ID" and not symbol_table.has(token.getstr()):
            symbol_table.add(token.getstr())
        tokens.append(token)
    tokens.append(end_marker(src_text))
    return tokens


def dump_lines(tokens: List[rply.Token]) -> List[str]:
    return [f"({token.gettokentype()},{token.getstr()})" for token in tokens]
