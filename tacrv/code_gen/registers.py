import contextlib
import logging
from typing import Dict, Iterable, Optional, Set

from tacrv.ir import ir

LOGGER = logging.getLogger(__name__)

NUM_REGISTERS = 7
REGISTER_PREFIX = "t"
RETURN_REGISTER = "a0"


class OutOfRegistersError(Exception):
    def __init__(self, msg):
        self.msg = msg


class RegisterFile:
    """
    Binds variables to a fixed number of physical registers.

    A register is only ever taken away from a variable that is dead: one that
    is never read at or after the current index. If no register is free and
    no occupant is dead, allocation fails with `OutOfRegistersError`; nothing
    is ever spilled.
    """

    def __init__(self, last_uses: Dict[ir.Variable, int], size: int = NUM_REGISTERS):
        if size < 1:
            raise ValueError("A register file needs at least one register!")
        self.size = size
        self.last_uses = last_uses
        self.occupants: Dict[int, ir.Variable] = dict()
        self.pinned: Set[ir.Variable] = set()

    @staticmethod
    def name_of(reg: int) -> str:
        return f"{REGISTER_PREFIX}{reg}"

    def register_of(self, var: ir.Variable) -> Optional[int]:
        for reg, occupant in self.occupants.items():
            if occupant == var:
                return reg
        return None

    def is_dead(self, var: ir.Variable, index: int) -> bool:
        # A variable that is never read has no entry.
        return self.last_uses.get(var, -1) < index

    @contextlib.contextmanager
    def pinning(self, variables: Iterable[ir.Variable]):
        """
        A context manager inside of which `variables` cannot be evicted,
        whatever their last use. Used to keep every variable of the
        instruction being lowered in place.
        """
        old_pinned = self.pinned
        self.pinned = old_pinned | set(variables)
        yield
        self.pinned = old_pinned

    def allocate(self, var: ir.Variable, index: int) -> str:
        reg = self.register_of(var)
        if reg is not None:
            return self.name_of(reg)

        for reg in range(self.size):
            if reg not in self.occupants:
                return self.bind(reg, var)

        for reg in range(self.size):
            occupant = self.occupants[reg]
            if occupant not in self.pinned and self.is_dead(occupant, index):
                LOGGER.debug("evicting %s from %s at index %d", occupant, self.name_of(reg), index)
                self.last_uses.pop(occupant, None)
                return self.bind(reg, var)

        occupants = ", ".join(f"{self.name_of(r)}={v}" for r, v in sorted(self.occupants.items()))
        raise OutOfRegistersError(
            f"No register for `{var}` at index {index}: every register holds a live variable ({occupants})!"
        )

    def bind(self, reg: int, var: ir.Variable) -> str:
        LOGGER.debug("binding %s to %s", var, self.name_of(reg))
        self.occupants[reg] = var
        return self.name_of(reg)

    def release(self, var: ir.Variable):
        reg = self.register_of(var)
        if reg is not None:
            del self.occupants[reg]
