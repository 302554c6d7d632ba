import logging as lg
import struct
from typing import Sequence

import pyparsing as pp

import hexcpu.sasm.grammar as grammar
from hexcpu.common.hwconf import COMMENT, WORD_FORMAT
from hexcpu.sasm.encoder import encode, decode, to_hex
from hexcpu.sasm.errors import AsmError, InstructionError, UnknownInstruction, OperandError
from hexcpu.sasm.table import OPCODES, Instruction


WORD_SIZE = struct.calcsize(WORD_FORMAT)


def parse_line(line: str) -> Instruction | None:
    '''
    Parse a single line of source text.

    Returns None for blank and comment-only lines, raises on anything
    that is not a valid instruction.
    '''

    # Strip the comment first, then the whitespace
    line = line.split(COMMENT)[0].strip()

    if not line:
        return None

    try:
        command = grammar.command.parse_string(line, parse_all=True)
    except pp.ParseException as e:
        raise InstructionError(f'Unable to parse instruction name for line: {line}') from e

    name = command['mnemonic']
    text = command.get('operands', '').strip()

    if name not in OPCODES:
        raise UnknownInstruction(f'Unknown instruction: {name}')

    opcode = OPCODES[name]

    try:
        args = grammar.match_operands(opcode.grammar, text)
    except pp.ParseException as e:
        raise OperandError(f'Unable to parse arguments for "{name}": "{text}"') from e

    word_hex = to_hex(encode(opcode, args))
    lg.debug(f'Issuing {word_hex} for {name} {list(args)}')
    return Instruction(opcode, args, word_hex)


def parse(text: str) -> list[Instruction]:
    program: list[Instruction] = []

    for lineno, line in enumerate(text.split('\n'), start=1):
        try:
            instruction = parse_line(line)
        except AsmError as e:
            e.add_note(f'at line {lineno}')
            raise

        if instruction is not None:
            program.append(instruction)

    return program


def compile_image(program: Sequence[Instruction]) -> bytes:
    return b''.join(struct.pack(WORD_FORMAT, instruction.word) for instruction in program)


def compile_program(text: str) -> bytes:
    return compile_image(parse(text))


def load_image(image: bytes) -> list[Instruction]:
    if len(image) % WORD_SIZE != 0:
        raise AsmError(f'Image size {len(image)} is not a multiple of {WORD_SIZE}')

    return [decode(word) for (word,) in struct.iter_unpack(WORD_FORMAT, image)]


def listing(program: Sequence[Instruction]) -> str:
    return ''.join(f'{instruction.hex}\n' for instruction in program)
