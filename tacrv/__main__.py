import argparse
import logging
import sys

import rply

from tacrv import build
from tacrv.code_gen import machine, registers
from tacrv.code_gen.registers import OutOfRegistersError
from tacrv.ir.ir import OperandTypeError
from tacrv.semantics.ir_gen import IRGenError
from tacrv.semantics.symtab import SymbolTableKeyError


def create_parser():
    ap = argparse.ArgumentParser(
        prog="tacrv",
        description="Compiles a straight-line source file to RISC-V assembly.",
    )

    ap.add_argument(
        "source_file",
        metavar="SRC",
        type=str,
        help="the file to compile",
    )

    ap.add_argument(
        "-o", "--out-dir",
        dest="out_dir",
        metavar="DIR",
        type=str,
        default=build.OUT_DIR,
        help="the directory to write tokens, IR and assembly into",
    )

    ap.add_argument(
        "-r", "--registers",
        dest="num_registers",
        metavar="N",
        type=int,
        default=registers.NUM_REGISTERS,
        help="the number of general purpose registers to allocate from",
    )

    ap.add_argument(
        "--run",
        action="store_true",
        help="run the generated assembly and print the returned value",
    )

    ap.add_argument(
        "--debug",
        action="store_true",
        help="enable debug logging to the console",
    )

    return ap


def position_of(err) -> str:
    pos = err.getsourcepos()
    if pos is None:
        return "at end of input"
    return f"on line {pos.lineno}, column {pos.colno}"


def main(argv=None) -> int:
    args = create_parser().parse_args(argv)

    logger = logging.getLogger("tacrv")
    if args.debug:
        logger.setLevel(logging.DEBUG)
        ch = logging.StreamHandler()
        ch.setLevel(logging.DEBUG)
        logger.addHandler(ch)

    try:
        compilation = build.compile_from_source_file(args.source_file, args.out_dir, args.num_registers)
        if args.run:
            print(build.return_value_of(compilation.asm, args.num_registers))
    except rply.LexingError as err:
        print(f"Lexing Error: Unexpected character {position_of(err)}!", file=sys.stderr)
        return 1
    except rply.ParsingError as err:
        print(f"Parsing Error: {err.message} {position_of(err)}!", file=sys.stderr)
        return 1
    except SymbolTableKeyError as err:
        print(f"Semantic Error: {err.msg}", file=sys.stderr)
        return 1
    except (IRGenError, OperandTypeError, OutOfRegistersError, machine.MachineError) as err:
        print(f"Internal Error: {err.msg}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
