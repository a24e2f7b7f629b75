from typing import List, Optional

import rply

from tacrv.ir import ir
from tacrv.ir.gen_ctx import IRGenCtx
from tacrv.parsing import grammar
from tacrv.parsing.driver import ActionObserver
from tacrv.parsing.table import Production


class IRGenError(Exception):
    def __init__(self, msg):
        self.msg = msg


BINARY_OPS = {
    grammar.ADD: ir.Add,
    grammar.SUB: ir.Sub,
    grammar.MUL: ir.Mul,
}


class IRGenerator(ActionObserver):
    """
    Lowers the program to three-address code while it is being parsed.

    Only operands live on the stack: integer literals, identifiers known to
    the symbol table, and the temporaries holding the value of reduced
    sub-expressions. An identifier the symbol table doesn't know about is
    skipped.
    """

    def __init__(self, ctx: Optional[IRGenCtx] = None):
        self.ctx = IRGenCtx() if ctx is None else ctx
        self.operands: List[ir.Operand] = []
        self.last_shift_pushed = False

    @property
    def instructions(self) -> List[ir.Instr]:
        return self.ctx.instructions

    def when_shift(self, state: int, token: rply.Token):
        kind, text = token.gettokentype(), token.getstr()
        operand = None

        if kind == "INT_CONST":
            operand = ir.Immediate(int(text))
        elif kind == "ID" and self.symbol_table.has(text):
            operand = ir.Variable.named(text)

        self.last_shift_pushed = operand is not None
        if operand is not None:
            self.push(operand)

    def when_reduce(self, state: int, production: Production):
        if production.index == grammar.ASSIGNMENT:
            rhs = self.pop()
            lhs = self.pop()
            self.ctx.emit(ir.Mov(lhs, rhs))
        elif production.index == grammar.RETURN:
            self.ctx.emit(ir.Ret(self.pop()))
        elif production.index in BINARY_OPS:
            arg2 = self.pop()
            arg1 = self.pop()
            temp = self.ctx.new_temp()
            self.ctx.emit(BINARY_OPS[production.index](temp, arg1, arg2))
            self.push(temp)
        elif production.index == grammar.DECLARATION:
            # The declared identifier was shifted right before this reduce.
            if self.last_shift_pushed:
                self.pop()

    def when_accept(self, state: int):
        leftover = list(self.operands)
        self.operands.clear()
        if leftover:
            leftover_fmt = ", ".join(str(op) for op in leftover)
            raise IRGenError(f"Operand stack not empty after accept: [{leftover_fmt}]!")

    def push(self, operand: ir.Operand):
        self.operands.append(operand)

    def pop(self) -> ir.Operand:
        if not self.operands:
            raise IRGenError("Operand stack underflow!")
        return self.operands.pop()

    def dump_lines(self) -> List[str]:
        return self.ctx.dump_lines()
