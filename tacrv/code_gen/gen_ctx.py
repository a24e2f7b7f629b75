from __future__ import annotations

import itertools
import logging
from typing import List, Sequence

from tacrv.code_gen import liveness, registers, riscv
from tacrv.ir import ir

LOGGER = logging.getLogger(__name__)

INDENT = "    "


class AsmGenCtx:
    """
    Lowers a finished IR program to assembly, allocating registers as it
    goes.

    Liveness is computed once, up front. Instructions are then lowered in
    order; within an instruction, registers are requested for the sources
    first, then the scratch register (if any), then the destination.
    """

    def __init__(self, program: Sequence[ir.Instr], num_registers: int = registers.NUM_REGISTERS):
        self.program = program
        self.last_uses = liveness.last_uses(program)
        self.regs = registers.RegisterFile(dict(self.last_uses), num_registers)
        self.scratch_generator = itertools.count()
        self.body: List[riscv.Instr] = []
        self.index = 0

    def add_instr(self, instr: riscv.Instr):
        self.body.append(instr)

    def reg(self, operand: ir.Operand) -> str:
        var = ir.expect_variable(operand, "register")
        return self.regs.allocate(var, self.index)

    def new_scratch(self) -> ir.Variable:
        return ir.Variable(f"$li{next(self.scratch_generator)}", is_temp=True)

    def generate(self) -> AsmGenCtx:
        for index, instr in liveness.numbered(self.program):
            self.index = index
            in_use = [op for op in instr.operands if isinstance(op, ir.Variable)]
            if instr.result is not None:
                in_use.append(instr.result)
            with self.regs.pinning(in_use):
                self.lower(instr)
        LOGGER.info("lowered %d IR instructions to %d assembly instructions", len(self.program), len(self.body))
        return self

    def lower(self, instr: ir.Instr):
        if isinstance(instr, ir.Mov):
            self.lower_mov(instr)
        elif isinstance(instr, ir.Add):
            self.lower_add(instr)
        elif isinstance(instr, (ir.Sub, ir.Mul)):
            self.lower_reg_op(instr)
        elif isinstance(instr, ir.Ret):
            self.lower_ret(instr)
        else:
            raise ir.OperandTypeError(f"Cannot lower `{instr}`!")

    def lower_mov(self, instr: ir.Mov):
        if isinstance(instr.rhs, ir.Immediate):
            self.add_instr(riscv.Li(self.reg(instr.lhs), instr.rhs.value))
        else:
            src = self.reg(instr.rhs)
            self.add_instr(riscv.Mv(self.reg(instr.lhs), src))

    def fold(self, instr: ir.BinaryOp) -> bool:
        if instr.immediates() != 2:
            return False
        value = instr.fold(instr.arg1.value, instr.arg2.value)
        self.add_instr(riscv.Li(self.reg(instr.lhs), value))
        return True

    def lower_add(self, instr: ir.Add):
        if self.fold(instr):
            return

        if instr.immediates() == 1:
            # Addition commutes, so the immediate can go last whichever side
            # it came from.
            if isinstance(instr.arg1, ir.Immediate):
                imm, other = instr.arg1, instr.arg2
            else:
                other, imm = instr.arg1, instr.arg2
            src = self.reg(other)
            self.add_instr(riscv.Addi(self.reg(instr.lhs), src, imm.value))
        else:
            rs1, rs2 = self.reg(instr.arg1), self.reg(instr.arg2)
            self.add_instr(riscv.Add(self.reg(instr.lhs), rs1, rs2))

    def lower_reg_op(self, instr: ir.BinaryOp):
        if self.fold(instr):
            return

        cls = riscv.Sub if isinstance(instr, ir.Sub) else riscv.Mul

        if instr.immediates() == 1:
            # The immediate keeps its side: `sub`, `mul` take operands as written.
            imm_first = isinstance(instr.arg1, ir.Immediate)
            imm, var = (instr.arg1, instr.arg2) if imm_first else (instr.arg2, instr.arg1)
            scratch = self.new_scratch()

            with self.regs.pinning([scratch]):
                src = self.reg(var)
                tmp = self.reg(scratch)
                rs1, rs2 = (tmp, src) if imm_first else (src, tmp)
                self.add_instr(riscv.Li(tmp, imm.value))
                self.add_instr(cls(self.reg(instr.lhs), rs1, rs2))

            self.regs.release(scratch)
        else:
            rs1, rs2 = self.reg(instr.arg1), self.reg(instr.arg2)
            self.add_instr(cls(self.reg(instr.lhs), rs1, rs2))

    def lower_ret(self, instr: ir.Ret):
        if isinstance(instr.value, ir.Immediate):
            self.add_instr(riscv.Li(registers.RETURN_REGISTER, instr.value.value))
        else:
            self.add_instr(riscv.Mv(registers.RETURN_REGISTER, self.reg(instr.value)))

    def lines(self) -> List[str]:
        return [".text"] + [INDENT + instr.to_asm() for instr in self.body]

    def __str__(self) -> str:
        return "\n".join(self.lines())


def generate(program: Sequence[ir.Instr], num_registers: int = registers.NUM_REGISTERS) -> List[str]:
    return AsmGenCtx(program, num_registers).generate().lines()
