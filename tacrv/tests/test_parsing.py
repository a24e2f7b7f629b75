import pytest
import rply

from tacrv import parsing
from tacrv.parsing import grammar, lexer
from tacrv.parsing.driver import ActionObserver, ParseDriver
from tacrv.parsing.table import LRTable, Production, Shift, Reduce, Accept, Error
from tacrv.semantics.production_collector import ProductionCollector
from tacrv.semantics.symtab import SymbolTable


class Recorder(ActionObserver):
    def __init__(self, log, tag=None):
        self.log = log
        self.tag = tag

    def record(self, *event):
        self.log.append(event if self.tag is None else (self.tag, *event))

    def when_shift(self, state, token):
        self.record("shift", state, token.getstr())

    def when_reduce(self, state, production):
        self.record("reduce", state, str(production))

    def when_accept(self, state):
        self.record("accept", state)


def sums_table() -> LRTable:
    """
    Hand-built table for:
        0. S' -> E
        1. E -> E PLUS NUM
        2. E -> NUM
    """
    productions = [
        Production(0, "S'", ("E",)),
        Production(1, "E", ("E", "PLUS", "NUM")),
        Production(2, "E", ("NUM",)),
    ]
    lr_action = [
        {"NUM": 1},
        {"PLUS": -2, "$end": -2},
        {"PLUS": 3, "$end": 0},
        {"NUM": 4},
        {"PLUS": -1, "$end": -1},
    ]
    lr_goto = [{"E": 2}, {}, {}, {}, {}]
    return LRTable(lr_action, lr_goto, productions)


def tokens(*pairs):
    return [rply.Token(kind, text) for kind, text in pairs] + [rply.Token("$end", "$end")]


def test_table_actions():
    table = sums_table()
    assert table.initial_state() == 0
    assert table.action(0, "NUM") == Shift(1)
    assert table.action(1, "$end") == Reduce(table.productions[2])
    assert table.action(2, "$end") == Accept()
    assert table.action(0, "PLUS") == Error()
    assert table.goto(0, "E") == 2


def test_driver_event_order():
    log = []
    driver = ParseDriver(sums_table(), SymbolTable())
    driver.register_observer(Recorder(log))
    driver.run(tokens(("NUM", "1"), ("PLUS", "+"), ("NUM", "2")))

    assert log == [
        ("shift", 1, "1"),
        ("reduce", 0, "E -> NUM"),
        ("shift", 3, "+"),
        ("shift", 4, "2"),
        ("reduce", 0, "E -> E PLUS NUM"),
        ("accept", 2),
    ]


def test_observers_run_in_registration_order():
    log = []
    driver = ParseDriver(sums_table(), SymbolTable())
    driver.register_observer(Recorder(log, "first"))
    driver.register_observer(Recorder(log, "second"))
    driver.run(tokens(("NUM", "1")))

    assert [entry[0] for entry in log] == ["first", "second"] * 3


def test_register_observer_binds_symbol_table():
    symbol_table = SymbolTable()
    observer = Recorder([])
    ParseDriver(sums_table(), symbol_table).register_observer(observer)
    assert observer.symbol_table is symbol_table


def test_driver_rejects_bad_token():
    driver = ParseDriver(sums_table(), SymbolTable())
    with pytest.raises(rply.ParsingError):
        driver.run(tokens(("NUM", "1"), ("NUM", "2")))


def test_driver_rejects_truncated_stream():
    driver = ParseDriver(sums_table(), SymbolTable())
    with pytest.raises(rply.ParsingError):
        driver.run([rply.Token("NUM", "1")])


def test_scan_registers_identifiers():
    symbol_table = SymbolTable()
    toks = lexer.scan("int a; a = 3 + 4; return a;", symbol_table)

    assert [t.gettokentype() for t in toks] == [
        "INT", "ID", "SEMICOLON",
        "ID", "ASSIGN", "INT_CONST", "PLUS", "INT_CONST", "SEMICOLON",
        "RETURN", "ID", "SEMICOLON",
        "$end",
    ]
    assert symbol_table.has("a")
    assert list(symbol_table.entries) == ["a"]


def test_keywords_need_word_boundary():
    toks = lexer.scan("integer = returned;", SymbolTable())
    assert [t.gettokentype() for t in toks][:3] == ["ID", "ASSIGN", "ID"]


def test_lexing_error():
    with pytest.raises(rply.LexingError):
        lexer.scan("int a; a = 3 @ 4;", SymbolTable())


def test_token_dump():
    toks = lexer.scan("return 1;", SymbolTable())
    assert lexer.dump_lines(toks) == [
        "(RETURN,return)",
        "(INT_CONST,1)",
        "(SEMICOLON,;)",
        "($end,$end)",
    ]


def test_grammar_indices_match_table():
    productions = grammar.table.productions
    assert str(productions[grammar.DECLARATION]) == "stmt -> decl_type ID"
    assert str(productions[grammar.INT_TYPE]) == "decl_type -> INT"
    assert str(productions[grammar.ASSIGNMENT]) == "stmt -> ID ASSIGN expr"
    assert str(productions[grammar.RETURN]) == "stmt -> RETURN expr"
    assert str(productions[grammar.ADD]) == "expr -> expr PLUS term"
    assert str(productions[grammar.SUB]) == "expr -> expr MINUS term"
    assert str(productions[grammar.MUL]) == "term -> term STAR factor"


def test_reduction_sequence():
    collector = ProductionCollector()
    parsing.parse("int a; a = 3 + 4; return a;", [collector])

    assert collector.dump_lines() == [
        "decl_type -> INT",
        "stmt -> decl_type ID",
        "factor -> INT_CONST",
        "term -> factor",
        "expr -> term",
        "factor -> INT_CONST",
        "term -> factor",
        "expr -> expr PLUS term",
        "stmt -> ID ASSIGN expr",
        "factor -> ID",
        "term -> factor",
        "expr -> term",
        "stmt -> RETURN expr",
        "stmt_list -> stmt SEMICOLON",
        "stmt_list -> stmt SEMICOLON stmt_list",
        "stmt_list -> stmt SEMICOLON stmt_list",
        "program -> stmt_list",
    ]


def test_syntax_error_position():
    with pytest.raises(rply.ParsingError) as excinfo:
        parsing.parse("int a;\na = 3 +;", [])
    pos = excinfo.value.getsourcepos()
    assert (pos.lineno, pos.colno) == (2, 8)
