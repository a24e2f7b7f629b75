from abc import ABC, abstractmethod
from dataclasses import dataclass


class ToAsm(ABC):

    @abstractmethod
    def to_asm(self) -> str:
        pass


class Instr(ToAsm, ABC):
    MNEMONIC = None


@dataclass
class Li(Instr):
    MNEMONIC = "li"
    rd: str
    imm: int

    def to_asm(self) -> str:
        return f"li {self.rd}, {self.imm}"


@dataclass
class Mv(Instr):
    MNEMONIC = "mv"
    rd: str
    rs: str

    def to_asm(self) -> str:
        return f"mv {self.rd}, {self.rs}"


@dataclass
class Addi(Instr):
    """Register plus immediate. There is no `subi` or `muli`."""
    MNEMONIC = "addi"
    rd: str
    rs: str
    imm: int

    def to_asm(self) -> str:
        return f"addi {self.rd}, {self.rs}, {self.imm}"


@dataclass
class RegOp(Instr, ABC):
    rd: str
    rs1: str
    rs2: str

    def to_asm(self) -> str:
        return f"{self.MNEMONIC} {self.rd}, {self.rs1}, {self.rs2}"


@dataclass
class Add(RegOp):
    MNEMONIC = "add"


@dataclass
class Sub(RegOp):
    MNEMONIC = "sub"


@dataclass
class Mul(RegOp):
    MNEMONIC = "mul"
