import itertools
from typing import List

from tacrv.ir import ir


class IRGenCtx:
    def __init__(self):
        self.temp_generator = itertools.count()
        self.instructions: List[ir.Instr] = []

    def new_temp(self) -> ir.Variable:
        i = next(self.temp_generator)
        return ir.Variable.temp(i)

    def emit(self, instruction: ir.Instr):
        self.instructions.append(instruction)

    def dump_lines(self) -> List[str]:
        return [str(instr) for instr in self.instructions]
