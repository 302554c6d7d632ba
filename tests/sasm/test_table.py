import inspect

import pytest

import hexcpu.common.ops as ops
import hexcpu.runtime.cpu as cpu
from hexcpu.sasm.errors import ConfigurationError
from hexcpu.sasm.grammar import Shape, operand_grammar
from hexcpu.sasm.table import OPCODES, CODES, Opcode, g_op, make_table, validate


def test_instruction_set():
    assert set(OPCODES) == {
        'mov1', 'mov2', 'mov3', 'mov4', 'add', 'subt', 'jz', 'halt', 'mul', 'load', 'readm'
    }


def test_codes():
    assert {name: opcode.code for name, opcode in OPCODES.items()} == {
        'mov1': 0, 'mov2': 1, 'mov3': 2, 'mov4': 3, 'add': 4, 'subt': 5,
        'jz': 6, 'readm': 7, 'mul': 8, 'load': 10, 'halt': 15
    }

    assert len(CODES) == len(OPCODES)


def test_shapes():
    assert OPCODES['mov1'].shape == Shape(1, True)
    assert OPCODES['mov3'].shape == Shape(2)
    assert OPCODES['add'].shape == Shape(3)
    assert OPCODES['halt'].shape == Shape()
    assert OPCODES['readm'].shape == Shape(0, True)


def test_action_arity_matches_shape():
    for opcode in OPCODES.values():
        params = inspect.signature(opcode.action).parameters
        # First parameter is the execution state
        assert len(params) - 1 == opcode.shape.registers + opcode.shape.immediate


def test_missing_handler():
    with pytest.raises(ConfigurationError):
        g_op('nop', 0xE)


def test_duplicate_code():
    with pytest.raises(ConfigurationError, match='Duplicate'):
        validate([g_op('add', ops.ADD, 3), g_op('plus', ops.ADD, 3)])


def test_code_too_wide():
    shape = Shape()
    big = Opcode('big', 16, shape, cpu.halt, operand_grammar(shape))

    with pytest.raises(ConfigurationError, match='Invalid instruction number'):
        validate([big])


def test_too_many_operands():
    with pytest.raises(ConfigurationError):
        validate([g_op('add', ops.ADD, 3, True)])


def test_handler_arity_mismatch():
    # mov3 handler takes two registers
    with pytest.raises(ConfigurationError, match='mov3'):
        make_table([g_op('mov3', ops.MOV3, 3)])

    with pytest.raises(ConfigurationError):
        validate([g_op('halt', ops.HALT, immediate=True)])
