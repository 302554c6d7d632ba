''' Opcode table and decoded instructions '''

import inspect
from dataclasses import dataclass, field

import pyparsing as pp

import hexcpu.common.ops as ops
from hexcpu.common.hwconf import OPCODE_BITS, FIELDS, REG_MARKER
from hexcpu.runtime.cpu import HANDLERS, Action, State
from hexcpu.sasm.errors import ConfigurationError
from hexcpu.sasm.grammar import Shape, operand_grammar


@dataclass(frozen=True)
class Opcode:
    mnemonic: str
    code: int
    shape: Shape
    action: Action = field(repr=False)
    grammar: pp.ParserElement = field(repr=False, compare=False)


@dataclass(frozen=True)
class Instruction:
    opcode: Opcode
    args: tuple[int, ...]   # registers first, immediate last
    hex: str

    @property
    def mnemonic(self) -> str:
        return self.opcode.mnemonic

    @property
    def evaluate(self) -> Action:
        return self.opcode.action

    @property
    def word(self) -> int:
        return int(self.hex, 16)

    def execute(self, state: State) -> bool | None:
        return self.opcode.action(state, *self.args)

    def __str__(self) -> str:
        registers = self.opcode.shape.registers
        operands = [f'{REG_MARKER}{arg}' for arg in self.args[:registers]]
        operands.extend(str(arg) for arg in self.args[registers:])
        return ' '.join([self.mnemonic, *operands])


def g_op(mnemonic: str, code: int, registers: int = 0, immediate: bool = False) -> Opcode:
    if code not in HANDLERS:
        raise ConfigurationError(f'No handler for instruction {mnemonic} ({code})')

    shape = Shape(registers, immediate)
    return Opcode(mnemonic, code, shape, HANDLERS[code], operand_grammar(shape))


def validate(opcodes: list[Opcode]):
    codes = set()
    mnemonics = set()

    for opcode in opcodes:
        if not 0 <= opcode.code < 2 ** OPCODE_BITS:
            raise ConfigurationError(f'Invalid instruction number: {opcode.code}')

        if opcode.code in codes:
            raise ConfigurationError(f'Duplicate instruction number: {opcode.code}')

        if opcode.mnemonic in mnemonics:
            raise ConfigurationError(f'Duplicate instruction: {opcode.mnemonic}')

        if not opcode.mnemonic.isalnum():
            raise ConfigurationError(f'Invalid instruction name: {opcode.mnemonic}')

        # Immediate needs at least one free field
        if opcode.shape.registers + opcode.shape.immediate > FIELDS:
            raise ConfigurationError(f'Too many operands for {opcode.mnemonic}')

        # Handler takes the state, then one argument per operand
        arity = len(inspect.signature(opcode.action).parameters) - 1

        if arity != opcode.shape.registers + opcode.shape.immediate:
            raise ConfigurationError(
                f'Handler of {opcode.mnemonic} takes {arity} operands, grammar has {opcode.shape}'
            )

        codes.add(opcode.code)
        mnemonics.add(opcode.mnemonic)


def make_table(opcodes: list[Opcode]):
    validate(opcodes)
    by_name = {opcode.mnemonic: opcode for opcode in opcodes}
    by_code = {opcode.code: opcode for opcode in opcodes}
    return by_name, by_code


OPCODES, CODES = make_table([
    g_op('mov1', ops.MOV1, 1, True),
    g_op('mov2', ops.MOV2, 1, True),
    g_op('mov3', ops.MOV3, 2),
    g_op('mov4', ops.MOV4, 1, True),
    g_op('add', ops.ADD, 3),
    g_op('subt', ops.SUBT, 3),
    g_op('jz', ops.JZ, 1, True),
    g_op('halt', ops.HALT),
    g_op('mul', ops.MUL, 3),
    g_op('load', ops.LOAD, 2),
    g_op('readm', ops.READM, immediate=True),
])
