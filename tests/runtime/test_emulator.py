# type: ignore
import pytest

import hexcpu.sasm.asm as asm
import hexcpu.runtime.cpu as cpu
import hexcpu.runtime.emulator as emulator

import unit_utils
from fixtures import factorial_source  # noqa: F401


def test_factorial():
    state = unit_utils.execute_source('testdata/factorial.hasm')

    assert state.registers[1] == 0
    assert state.registers[2] == 120
    assert state.registers[3] == 1
    assert state.memory[:3] == [5, 1, 120]
    assert state.output == {21: 120}


def test_factorial_from_image(factorial_source):  # noqa: F811
    image = asm.compile_program(factorial_source)
    state = emulator.execute(asm.load_image(image))
    assert state.output == {21: 120}


def test_halt_stops():
    program = asm.parse('readm 1\nhalt\nreadm 2\n')
    state = emulator.execute(program)
    assert state.output == {0: 1}
    assert state.counter == 2
    assert state.time == 2


def test_runs_off_the_end():
    state = emulator.execute(asm.parse('readm 3\nreadm 4'))
    assert state.output == {0: 3, 1: 4}
    assert state.counter == 2


def test_jump_outside_the_program():
    program = asm.parse('mov4 R0 1\nmov1 R1 0\njz R1 200\nhalt')
    state = emulator.execute(program)
    assert state.counter == 200


def test_step_limit():
    with pytest.raises(emulator.StepLimit):
        unit_utils.execute_source('testdata/forever.hasm', max_steps=100)


def test_fault():
    with pytest.raises(cpu.Fault, match='400'):
        unit_utils.execute_source('testdata/fault.hasm')


def test_existing_state():
    state = cpu.State()
    state.registers[1] = 2
    state.registers[2] = 3

    emulator.execute(asm.parse('mul R3 R1 R2\nhalt'), state)
    assert state.registers[3] == 6
