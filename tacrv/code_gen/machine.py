from typing import Dict, Iterable, Optional

from tacrv.code_gen import registers


class MachineError(Exception):
    def __init__(self, msg):
        self.msg = msg


class Machine:
    """
    Executes the subset of RISC-V that the code generator emits
    (`li mv add addi sub mul`), one line at a time, and reports `a0`.
    """

    def __init__(self, num_registers: int = registers.NUM_REGISTERS):
        self.regs: Dict[str, Optional[int]] = {
            registers.RegisterFile.name_of(r): None for r in range(num_registers)
        }
        self.regs[registers.RETURN_REGISTER] = None

    def read(self, reg: str) -> int:
        if reg not in self.regs:
            raise MachineError(f"Unknown register `{reg}`!")
        value = self.regs[reg]
        if value is None:
            raise MachineError(f"Register `{reg}` is read before it is written!")
        return value

    def write(self, reg: str, value: int):
        if reg not in self.regs:
            raise MachineError(f"Unknown register `{reg}`!")
        self.regs[reg] = value

    def step(self, line: str):
        mnemonic, _, rest = line.strip().partition(" ")
        args = [arg.strip() for arg in rest.split(",")]

        if mnemonic == "li":
            rd, imm = args
            self.write(rd, int(imm))
        elif mnemonic == "mv":
            rd, rs = args
            self.write(rd, self.read(rs))
        elif mnemonic == "addi":
            rd, rs, imm = args
            self.write(rd, self.read(rs) + int(imm))
        elif mnemonic == "add":
            rd, rs1, rs2 = args
            self.write(rd, self.read(rs1) + self.read(rs2))
        elif mnemonic == "sub":
            rd, rs1, rs2 = args
            self.write(rd, self.read(rs1) - self.read(rs2))
        elif mnemonic == "mul":
            rd, rs1, rs2 = args
            self.write(rd, self.read(rs1) * self.read(rs2))
        else:
            raise MachineError(f"Unknown instruction `{line.strip()}`!")

    def run(self, lines: Iterable[str]) -> Optional[int]:
        for line in lines:
            if not line.strip() or line.startswith("."):
                continue  # Section markers.
            self.step(line)
        return self.regs[registers.RETURN_REGISTER]
