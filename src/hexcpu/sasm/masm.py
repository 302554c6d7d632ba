import sys
from pathlib import Path
import logging as lg

import click

import hexcpu.sasm.asm as asm
from hexcpu.sasm.errors import AsmError
from hexcpu.runtime.emulator import EXIT_ASM_ERROR


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--hex', 'as_hex', is_flag=True, help='Write a hex listing instead of a binary image')
@click.argument('source', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('output', type=Path)
def compile(verbose: bool, as_hex: bool, source: Path, output: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('HEXASM')

    try:
        program = asm.parse(source.read_text())
    except AsmError as e:
        lg.error(' '.join([str(e), *getattr(e, '__notes__', [])]))
        sys.exit(EXIT_ASM_ERROR)

    output.parent.mkdir(parents=True, exist_ok=True)

    if as_hex:
        output.write_text(asm.listing(program))
    else:
        output.write_bytes(asm.compile_image(program))

    lg.info(f'{len(program)} instructions written to {output}')


if __name__ == '__main__':
    compile()
