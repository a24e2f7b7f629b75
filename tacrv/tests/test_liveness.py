from tacrv import parsing
from tacrv.code_gen import liveness
from tacrv.ir.ir import *
from tacrv.semantics.ir_gen import IRGenerator


def get_program():
    """
    t0 = a + 1
    t1 = a - 1
    b = t1
    return t0
    """
    a, b = Variable.named("a"), Variable.named("b")
    t0, t1 = Variable.temp(0), Variable.temp(1)
    return [
        Add(t0, a, Immediate(1)),
        Sub(t1, a, Immediate(1)),
        Mov(b, t1),
        Ret(t0),
    ]


def test_numbering_counts_materialization_steps():
    indices = [index for index, _ in liveness.numbered(get_program())]
    assert indices == [0, 2, 3, 4]


def test_last_uses():
    a = Variable.named("a")
    t0, t1 = Variable.temp(0), Variable.temp(1)
    assert liveness.last_uses(get_program()) == {a: 2, t1: 3, t0: 4}


def test_results_are_not_reads():
    b = Variable.named("b")
    assert b not in liveness.last_uses(get_program())


def test_needs_scratch():
    a, t = Variable.named("a"), Variable.temp(0)
    assert liveness.needs_scratch(Sub(t, a, Immediate(1)))
    assert liveness.needs_scratch(Mul(t, Immediate(2), a))
    assert not liveness.needs_scratch(Add(t, a, Immediate(1)))
    assert not liveness.needs_scratch(Mul(t, Immediate(2), Immediate(3)))
    assert not liveness.needs_scratch(Sub(t, a, a))


def test_no_reads_after_last_use():
    ir_gen = IRGenerator()
    parsing.parse("""
        int a;
        int b;
        int c;
        a = 8;
        b = a * 2 - 3;
        c = (a + b) * (b - 1) - 4 * a;
        a = c - b;
        return a * 3;
    """, [ir_gen])
    program = ir_gen.instructions
    table = liveness.last_uses(program)

    for index, instr in liveness.numbered(program):
        for operand in instr.operands:
            if isinstance(operand, Variable):
                assert index <= table[operand]
