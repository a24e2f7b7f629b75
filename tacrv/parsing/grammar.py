import rply

from tacrv.parsing import lexer
from tacrv.parsing.table import LRTable

# Production `n` in the table is `RULES[n - 1]`; rply reserves index 0 for
# the augmented start production.
RULES = [
    "program : stmt_list",
    "stmt_list : stmt SEMICOLON stmt_list",
    "stmt_list : stmt SEMICOLON",
    "stmt : decl_type ID",
    "decl_type : INT",
    "stmt : ID ASSIGN expr",
    "stmt : RETURN expr",
    "expr : expr PLUS term",
    "expr : expr MINUS term",
    "expr : term",
    "term : term STAR factor",
    "term : factor",
    "factor : LPAREN expr RPAREN",
    "factor : ID",
    "factor : INT_CONST",
]


def index_of(rule: str) -> int:
    return RULES.index(rule) + 1


DECLARATION = index_of("stmt : decl_type ID")
INT_TYPE = index_of("decl_type : INT")
ASSIGNMENT = index_of("stmt : ID ASSIGN expr")
RETURN = index_of("stmt : RETURN expr")
ADD = index_of("expr : expr PLUS term")
SUB = index_of("expr : expr MINUS term")
MUL = index_of("term : term STAR factor")


def reduced_by_driver(s):
    raise NotImplementedError("Productions are reduced by `ParseDriver`, not rply's parser.")


pg = rply.ParserGenerator(lexer.all_tokens)

for rule in RULES:
    pg.production(rule)(reduced_by_driver)

table = LRTable.from_rply(pg.build().lr_table)
