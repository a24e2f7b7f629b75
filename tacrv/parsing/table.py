from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class Production:
    index: int
    head: str
    body: Tuple[str, ...]

    def __str__(self):
        return f"{self.head} -> {' '.join(self.body)}"


class Action(ABC):
    pass


@dataclass(frozen=True)
class Shift(Action):
    state: int


@dataclass(frozen=True)
class Reduce(Action):
    production: Production


@dataclass(frozen=True)
class Accept(Action):
    pass


@dataclass(frozen=True)
class Error(Action):
    pass


class LRTable:
    """
    Action and goto lookups over a precomputed LR table.

    Actions are encoded the way rply encodes them: a positive entry shifts to
    that state, a negative entry `-n` reduces by production `n` and `0`
    accepts. A missing entry is an error.
    """

    def __init__(
            self,
            lr_action: List[Dict[str, int]],
            lr_goto: List[Dict[str, int]],
            productions: List[Production],
            initial_state: int = 0
    ):
        self.lr_action = lr_action
        self.lr_goto = lr_goto
        self.productions = productions
        self._initial_state = initial_state

    @classmethod
    def from_rply(cls, lr_table) -> LRTable:
        productions = [
            Production(p.number, p.name, tuple(p.prod))
            for p in lr_table.grammar.productions
        ]
        return cls(lr_table.lr_action, lr_table.lr_goto, productions)

    def initial_state(self) -> int:
        return self._initial_state

    def action(self, state: int, terminal: str) -> Action:
        t = self.lr_action[state].get(terminal)
        if t is None:
            return Error()
        elif t > 0:
            return Shift(t)
        elif t < 0:
            return Reduce(self.productions[-t])
        else:
            return Accept()

    def goto(self, state: int, nonterminal: str) -> int:
        return self.lr_goto[state][nonterminal]
