import sys
from pathlib import Path
import logging as lg
from typing import Sequence

import click

import hexcpu.runtime.cpu as cpu
import hexcpu.sasm.asm as asm
from hexcpu.sasm.errors import AsmError
from hexcpu.sasm.table import Instruction


EXIT_HALT = 0
EXIT_ASM_ERROR = 1
EXIT_FAULT = 2
EXIT_STEP_LIMIT = 3
EXIT_KEYBOARD = 4


class StepLimit(Exception):
    pass


def execute(
    program: Sequence[Instruction],
    state: cpu.State | None = None,
    max_steps: int | None = None
) -> cpu.State:
    if state is None:
        state = cpu.State()

    steps = 0

    while True:
        if not 0 <= state.counter < len(program):
            lg.warning(f'Program counter {state.counter} is outside of the program')
            return state

        if max_steps is not None and steps >= max_steps:
            raise StepLimit(f'Step limit {max_steps} reached')

        instruction = program[state.counter]

        # Advance first, jz may overwrite the counter
        state.counter += 1
        lg.debug(f'{state.time}: {instruction}')
        halted = instruction.execute(state)
        state.time += 1
        steps += 1

        if halted:
            state.debug_dump()
            return state


def load_program(path: Path, source: bool) -> list[Instruction]:
    if source:
        return asm.parse(path.read_text())

    return asm.load_image(path.read_bytes())


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--source', is_flag=True, help='Treat PROGRAM as assembly text')
@click.option('--max-steps', type=int, help='Stop after this many instructions')
@click.argument('program', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def run(verbose: bool, source: bool, max_steps: int | None, program: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('HEXEMU')

    try:
        instructions = load_program(program, source)
        state = execute(instructions, max_steps=max_steps)

    except AsmError as e:
        lg.error(' '.join([str(e), *getattr(e, '__notes__', [])]))
        sys.exit(EXIT_ASM_ERROR)

    except cpu.Fault as e:
        lg.error(f'Execution halted on fault: {e}')
        sys.exit(EXIT_FAULT)

    except StepLimit as e:
        lg.error(f'Execution halted: {e}')
        sys.exit(EXIT_STEP_LIMIT)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    for time, value in sorted(state.output.items()):
        click.echo(f'{time}: {value}')

    lg.info('Execution halted gracefully')
    sys.exit(EXIT_HALT)


if __name__ == '__main__':
    run()
