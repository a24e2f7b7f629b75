import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Union

import rply

from tacrv import parsing, utils
from tacrv.code_gen import gen_ctx, machine, registers
from tacrv.ir import ir
from tacrv.parsing import lexer
from tacrv.semantics import symtab
from tacrv.semantics.ir_gen import IRGenerator
from tacrv.semantics.production_collector import ProductionCollector
from tacrv.semantics.type_recorder import TypeRecorder

LOGGER = logging.getLogger(__name__)

OUT_DIR = "./data/out"

TOKENS_FILE_NAME = "tokens.txt"
SYMBOL_TABLE_FILE_NAME = "symbol_table.txt"
PRODUCTIONS_FILE_NAME = "parser_list.txt"
IR_FILE_NAME = "intermediate_code.txt"
ASM_FILE_NAME = "assembly_language.asm"


@dataclass
class Compilation:
    tokens: List[rply.Token]
    symbol_table: symtab.SymbolTable
    productions: ProductionCollector
    ir_gen: IRGenerator
    asm: List[str]

    @property
    def instructions(self) -> List[ir.Instr]:
        return self.ir_gen.instructions

    def write_to_dir(self, out_dir: str = OUT_DIR):
        utils.write_lines(os.path.join(out_dir, TOKENS_FILE_NAME), lexer.dump_lines(self.tokens))
        utils.write_lines(os.path.join(out_dir, SYMBOL_TABLE_FILE_NAME), self.symbol_table.dump_lines())
        utils.write_lines(os.path.join(out_dir, PRODUCTIONS_FILE_NAME), self.productions.dump_lines())
        utils.write_lines(os.path.join(out_dir, IR_FILE_NAME), self.ir_gen.dump_lines())
        utils.write_lines(os.path.join(out_dir, ASM_FILE_NAME), self.asm)


def compile_src(src_txt: str, num_registers: int = registers.NUM_REGISTERS) -> Compilation:
    symbol_table = symtab.SymbolTable()
    tokens = lexer.scan(src_txt, symbol_table)
    LOGGER.info("scanned %d tokens, %d symbols", len(tokens), len(symbol_table.entries))

    productions = ProductionCollector()
    ir_gen = IRGenerator()
    parser = parsing.driver.ParseDriver(parsing.grammar.table, symbol_table)
    parser.register_observer(productions)
    parser.register_observer(TypeRecorder())
    parser.register_observer(ir_gen)
    parser.run(tokens)
    LOGGER.info("generated %d IR instructions", len(ir_gen.instructions))

    asm = gen_ctx.generate(ir_gen.instructions, num_registers)
    return Compilation(tokens, symbol_table, productions, ir_gen, asm)


def return_value_of(
        arg: Union[str, List[str]],
        num_registers: int = registers.NUM_REGISTERS
) -> Optional[int]:
    """
    Compiles (if given source text) and runs the program on the assembly
    machine, returning the value left in the return register.
    """
    if isinstance(arg, str):
        lines = compile_src(arg, num_registers).asm
    else:
        lines = arg
    return machine.Machine(num_registers).run(lines)


def compile_from_source_file(
        source_file: str,
        out_dir: Optional[str] = None,
        num_registers: int = registers.NUM_REGISTERS
) -> Compilation:
    with open(source_file, "r") as f:
        compilation = compile_src(f.read(), num_registers)

    out_dir = OUT_DIR if out_dir is None else out_dir
    compilation.write_to_dir(out_dir)
    LOGGER.info("wrote artifacts for %s to %s", source_file, out_dir)
    return compilation
