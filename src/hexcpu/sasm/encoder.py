''' Word encoder and decoder

Word layout, most significant first:

    [opcode:4][field0:4][field1:4][field2:4]

Registers occupy the fields in declaration order. An immediate takes all
the low bits left after the register fields (12, 8 or 4 bits).
'''

import logging as lg
from typing import Sequence

from hexcpu.common.hwconf import WORD_BITS, OPCODE_BITS, FIELD_BITS, FIELDS, WORD_DIGITS
from hexcpu.sasm.errors import AsmError, ConfigurationError, EncodingOverflow, OperandError, UnknownInstruction
from hexcpu.sasm.grammar import Shape
from hexcpu.sasm.table import CODES, Opcode, Instruction


def field_shift(index: int) -> int:
    return FIELD_BITS * (FIELDS - 1 - index)


def immediate_bits(shape: Shape) -> int:
    return FIELD_BITS * (FIELDS - shape.registers)


def encode(opcode: Opcode, args: Sequence[int]) -> int:
    if not 0 <= opcode.code < 2 ** OPCODE_BITS:
        raise ConfigurationError(f'Invalid instruction number: {opcode.code}')

    shape = opcode.shape
    arity = shape.registers + shape.immediate

    if len(args) != arity:
        raise OperandError(f'"{opcode.mnemonic}" expects {arity} operands, got {len(args)}')

    # Opcode goes to the most significant bits
    word = opcode.code << (WORD_BITS - OPCODE_BITS)

    for i in range(shape.registers):
        value = args[i]

        if not 0 <= value < 2 ** FIELD_BITS:
            raise EncodingOverflow(
                f'Register R{value} of "{opcode.mnemonic}" does not fit into {FIELD_BITS} bits'
            )

        word += value << field_shift(i)

    if shape.immediate:
        value = args[-1]
        bits = immediate_bits(shape)

        if not 0 <= value < 2 ** bits:
            raise EncodingOverflow(
                f'Immediate {value} of "{opcode.mnemonic}" does not fit into {bits} bits'
            )

        word += value

    return word


def to_hex(decimal: int, length: int = WORD_DIGITS) -> str:
    if decimal < 0 or decimal >= 16 ** length:
        raise EncodingOverflow(f'Unable to convert {decimal} to HEX as it is too big')

    return f'{decimal:0{length}X}'


def decode(word: int) -> Instruction:
    word_hex = to_hex(word)
    code = word >> (WORD_BITS - OPCODE_BITS)

    if code not in CODES:
        raise UnknownInstruction(f'Unknown instruction number {code} in word {word_hex}')

    opcode = CODES[code]
    shape = opcode.shape
    field_mask = 2 ** FIELD_BITS - 1
    args = [(word >> field_shift(i)) & field_mask for i in range(shape.registers)]

    if shape.immediate:
        args.append(word & (2 ** immediate_bits(shape) - 1))

    # Unused fields must be clear
    if encode(opcode, args) != word:
        raise AsmError(f'Word {word_hex} has bits outside of "{opcode.mnemonic}" operands')

    lg.debug(f'Decoded {word_hex} as {opcode.mnemonic} {args}')
    return Instruction(opcode, tuple(args), word_hex)
