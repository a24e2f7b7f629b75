import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional

import rply

from tacrv.parsing import lexer
from tacrv.parsing.table import LRTable, Production, Shift, Reduce, Accept
from tacrv.semantics import symtab

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class StackEntry:
    state: int
    symbol: str


class ActionObserver(ABC):
    """
    Receives the events of a `ParseDriver` run. Observers are notified in
    registration order and keep whatever private state they need; they never
    talk to each other.
    """
    symbol_table: Optional[symtab.SymbolTable] = None

    def bind(self, symbol_table: symtab.SymbolTable):
        self.symbol_table = symbol_table

    @abstractmethod
    def when_shift(self, state: int, token: rply.Token):
        pass

    @abstractmethod
    def when_reduce(self, state: int, production: Production):
        pass

    @abstractmethod
    def when_accept(self, state: int):
        pass


class ParseDriver:
    """
    A shift-reduce driver over a precomputed `LRTable`.

    The driver builds no tree. Instead, every shift, reduce and accept is
    reported to the registered observers, in the exact order the automaton
    performs them. Observers that keep their own stacks rely on this order to
    stay in step with the parse stack.
    """

    def __init__(self, table: LRTable, symbol_table: symtab.SymbolTable):
        self.table = table
        self.symbol_table = symbol_table
        self.observers: List[ActionObserver] = []

    def register_observer(self, observer: ActionObserver):
        self.observers.append(observer)
        observer.bind(self.symbol_table)

    def notify_shift(self, state: int, token: rply.Token):
        for observer in self.observers:
            observer.when_shift(state, token)

    def notify_reduce(self, state: int, production: Production):
        for observer in self.observers:
            observer.when_reduce(state, production)

    def notify_accept(self, state: int):
        for observer in self.observers:
            observer.when_accept(state)

    def run(self, tokens: Iterable[rply.Token]):
        stack = [StackEntry(self.table.initial_state(), lexer.END)]
        stream = iter(tokens)
        token = next(stream, None)

        while token is not None:
            state = stack[-1].state
            action = self.table.action(state, token.gettokentype())

            if isinstance(action, Shift):
                LOGGER.debug("shift %r -> state %d", token.getstr(), action.state)
                self.notify_shift(action.state, token)
                stack.append(StackEntry(action.state, token.gettokentype()))
                token = next(stream, None)
            elif isinstance(action, Reduce):
                production = action.production
                LOGGER.debug("reduce by %d: %s", production.index, production)
                if production.body:
                    del stack[-len(production.body):]
                state = stack[-1].state
                self.notify_reduce(state, production)
                goto_state = self.table.goto(state, production.head)
                stack.append(StackEntry(goto_state, production.head))
            elif isinstance(action, Accept):
                LOGGER.debug("accept in state %d", state)
                self.notify_accept(state)
                return
            else:
                msg = f"Unexpected token {token.gettokentype()} {token.getstr()!r}"
                raise rply.ParsingError(msg, token.getsourcepos())

        raise rply.ParsingError("Token stream ended before the program was accepted", None)
