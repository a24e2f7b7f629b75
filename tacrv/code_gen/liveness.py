from typing import Dict, Iterable, Iterator, Tuple

from tacrv.ir import ir


def needs_scratch(instr: ir.Instr) -> bool:
    """
    `sub` and `mul` only come in a register-register form, so a `Sub` or `Mul`
    with exactly one immediate operand first loads the immediate with `li`.
    """
    return isinstance(instr, (ir.Sub, ir.Mul)) and instr.immediates() == 1


def numbered(program: Iterable[ir.Instr]) -> Iterator[Tuple[int, ir.Instr]]:
    """
    Yields `(index, instr)` pairs. The `li` step of an instruction that
    `needs_scratch` takes up an index of its own, right before the
    instruction's.
    """
    index = 0
    for instr in program:
        if needs_scratch(instr):
            index += 1
        yield index, instr
        index += 1


def last_uses(program: Iterable[ir.Instr]) -> Dict[ir.Variable, int]:
    """
    Maps every variable read by `program` to the index of its last read.

    Example:
        t0 = a + 1      # index 0
        t1 = a - 1      # indices 1 (li) and 2
        b = t1          # index 3
        return t0       # index 4
        ==> {a: 2, t1: 3, t0: 4}
    """
    table: Dict[ir.Variable, int] = dict()
    for index, instr in numbered(program):
        for operand in instr.operands:
            if isinstance(operand, ir.Variable):
                table[operand] = index
    return table
