from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple


class OperandTypeError(Exception):
    def __init__(self, msg):
        self.msg = msg


class Operand(ABC):
    pass


@dataclass(frozen=True)
class Immediate(Operand):
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Variable(Operand):
    """
    Named variables share the name of their symbol table entry. Temporaries
    are named `$<n>` where `n` comes from a counter, so two temporaries are
    equal only if they were created by the same call.
    """
    name: str
    is_temp: bool = False

    @staticmethod
    def named(name: str) -> Variable:
        return Variable(name)

    @staticmethod
    def temp(id: int) -> Variable:
        return Variable(f"${id}", is_temp=True)

    def __str__(self):
        return self.name


def expect_variable(value: Operand, slot: str) -> Variable:
    if not isinstance(value, Variable):
        raise OperandTypeError(f"Expected a variable in the {slot} slot, got `{value}`!")
    return value


class Kind(enum.Enum):
    MOV = "MOV"
    ADD = "ADD"
    SUB = "SUB"
    MUL = "MUL"
    RET = "RET"


class Instr(ABC):
    KIND: Kind = None

    @property
    def kind(self) -> Kind:
        return self.KIND

    @property
    @abstractmethod
    def operands(self) -> Tuple[Operand, ...]:
        """The operands read by this instruction, in order."""

    @property
    def result(self) -> Optional[Variable]:
        return None

    def __str__(self):
        result = "" if self.result is None else str(self.result)
        operands = ", ".join(str(op) for op in self.operands)
        return f"({self.kind.value}, {result}, {operands})"


@dataclass(frozen=True)
class Mov(Instr):
    KIND = Kind.MOV

    lhs: Variable
    rhs: Operand

    def __post_init__(self):
        expect_variable(self.lhs, "result")

    @property
    def result(self) -> Variable:
        return self.lhs

    @property
    def operands(self) -> Tuple[Operand, ...]:
        return (self.rhs,)


@dataclass(frozen=True)
class BinaryOp(Instr, ABC):
    lhs: Variable
    arg1: Operand
    arg2: Operand

    def __post_init__(self):
        expect_variable(self.lhs, "result")

    @property
    def result(self) -> Variable:
        return self.lhs

    @property
    def operands(self) -> Tuple[Operand, ...]:
        return self.arg1, self.arg2

    def immediates(self) -> int:
        return sum(isinstance(arg, Immediate) for arg in self.operands)

    @staticmethod
    @abstractmethod
    def fold(x: int, y: int) -> int:
        pass


@dataclass(frozen=True)
class Add(BinaryOp):
    KIND = Kind.ADD

    @staticmethod
    def fold(x: int, y: int) -> int:
        return x + y


@dataclass(frozen=True)
class Sub(BinaryOp):
    KIND = Kind.SUB

    @staticmethod
    def fold(x: int, y: int) -> int:
        return x - y


@dataclass(frozen=True)
class Mul(BinaryOp):
    KIND = Kind.MUL

    @staticmethod
    def fold(x: int, y: int) -> int:
        return x * y


@dataclass(frozen=True)
class Ret(Instr):
    KIND = Kind.RET

    value: Operand

    @property
    def operands(self) -> Tuple[Operand, ...]:
        return (self.value,)

