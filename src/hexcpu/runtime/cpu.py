import logging as lg
from typing import Callable, TypeAlias

import hexcpu.common.ops as ops
from hexcpu.common.hwconf import REGISTERS, MEMORY_SIZE


class Fault(Exception):
    ''' Register index or memory address out of range '''
    pass


class State():
    registers: list[int]    # Register file
    memory: list[int]       # Data memory
    output: dict[int, int]  # Output log, time -> value
    counter: int            # Index of the next instruction
    time: int               # Set by the driver

    def __init__(self):
        self.registers = [0] * REGISTERS
        self.memory = [0] * MEMORY_SIZE
        self.output = dict()
        self.counter = 0
        self.time = 0

    # - Helpers - #

    def debug_dump(self):
        state = [f'PC:{self.counter} T:{self.time}']
        state.extend([f'R{i}:{self.registers[i]:X}' for i in range(REGISTERS) if self.registers[i]])
        lg.debug(' '.join(state))

    def get_reg(self, index: int) -> int:
        if not 0 <= index < REGISTERS:
            raise Fault(f'Register R{index} out of range')

        return self.registers[index]

    def set_reg(self, index: int, value: int):
        if not 0 <= index < REGISTERS:
            raise Fault(f'Register R{index} out of range')

        self.registers[index] = value

    def get_mem(self, address: int) -> int:
        if not 0 <= address < MEMORY_SIZE:
            raise Fault(f'Memory address {address} out of range')

        return self.memory[address]

    def set_mem(self, address: int, value: int):
        if not 0 <= address < MEMORY_SIZE:
            raise Fault(f'Memory address {address} out of range')

        self.memory[address] = value


# Returns True to stop the driver
Action: TypeAlias = Callable[..., bool | None]


# - Operations - #

def mov1(state: State, r1: int, direct: int):
    state.set_reg(r1, state.get_mem(direct))


def mov2(state: State, r1: int, direct: int):
    state.set_mem(direct, state.get_reg(r1))


def mov3(state: State, r1: int, r2: int):
    state.set_mem(state.get_reg(r1), state.get_reg(r2))


# Writes memory at the literal address, the register file is untouched
def mov4(state: State, r1: int, imm: int):
    state.set_mem(r1, imm)


def add(state: State, r1: int, r2: int, r3: int):
    state.set_reg(r1, state.get_reg(r2) + state.get_reg(r3))


def subt(state: State, r1: int, r2: int, r3: int):
    state.set_reg(r1, state.get_reg(r2) - state.get_reg(r3))


# Jumps when the register is NOT zero
def jz(state: State, r1: int, imm: int):
    if state.get_reg(r1) != 0:
        state.counter = imm


def halt(state: State):
    return True


def mul(state: State, r1: int, r2: int, r3: int):
    state.set_reg(r1, state.get_reg(r2) * state.get_reg(r3))


def load(state: State, r1: int, r2: int):
    state.set_reg(r1, state.get_mem(state.get_reg(r2)))


def readm(state: State, imm: int):
    state.output[state.time] = imm


HANDLERS: dict[int, Action] = {
    ops.MOV1: mov1,
    ops.MOV2: mov2,
    ops.MOV3: mov3,
    ops.MOV4: mov4,
    ops.ADD: add,
    ops.SUBT: subt,
    ops.JZ: jz,
    ops.HALT: halt,
    ops.MUL: mul,
    ops.LOAD: load,
    ops.READM: readm
}
