from typing import Dict, Iterable, Optional

from tacrv.ir import ir


class EmulatorError(Exception):
    def __init__(self, msg):
        self.msg = msg


class IREmulator:
    """
    Runs a straight-line IR program directly, without going through register
    allocation. Used to check that generated assembly computes the same value
    as the IR it was lowered from.
    """

    def __init__(self):
        self.env: Dict[ir.Variable, int] = dict()

    def value_of(self, operand: ir.Operand) -> int:
        if isinstance(operand, ir.Immediate):
            return operand.value
        try:
            return self.env[operand]
        except KeyError:
            raise EmulatorError(f"Variable `{operand}` is read before it is assigned!")

    def run(self, program: Iterable[ir.Instr]) -> Optional[int]:
        for instr in program:
            if isinstance(instr, ir.Ret):
                return self.value_of(instr.value)
            elif isinstance(instr, ir.Mov):
                self.env[instr.lhs] = self.value_of(instr.rhs)
            elif isinstance(instr, ir.BinaryOp):
                x, y = (self.value_of(arg) for arg in instr.operands)
                self.env[instr.lhs] = instr.fold(x, y)
            else:
                raise EmulatorError(f"Unknown instruction `{instr}`!")
        return None


def run(program: Iterable[ir.Instr]) -> Optional[int]:
    return IREmulator().run(program)
