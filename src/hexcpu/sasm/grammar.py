''' Instruction grammar '''

from functools import cache
from typing import NamedTuple

import pyparsing as pp

from hexcpu.common.hwconf import REG_MARKER


class Shape(NamedTuple):
    registers: int = 0          # register operands, R<n>
    immediate: bool = False     # trailing unsigned decimal


# <mnemonic> <operands...>
mnemonic = pp.Word(pp.alphanums)
command = (mnemonic('mnemonic') + pp.rest_of_line('operands')).parse_with_tabs()


def g_reg():
    reg = pp.Combine(pp.Suppress(REG_MARKER) + pp.Word(pp.nums))
    return reg.set_parse_action(lambda r: int(r[0], 10))


def g_imm():
    return pp.Word(pp.nums).set_parse_action(lambda r: int(r[0], 10))


def g_sep():
    return pp.Suppress(pp.White(' '))


@cache
def operand_grammar(shape: Shape) -> pp.ParserElement:
    operands = [g_reg() for _ in range(shape.registers)]

    if shape.immediate:
        operands.append(g_imm())

    if not operands:
        return pp.Empty().parse_with_tabs()

    elements = [operands[0]]

    for operand in operands[1:]:
        elements.extend([g_sep(), operand])

    # Separators are matched explicitly, nothing else may be skipped
    return pp.And(elements).leave_whitespace().parse_with_tabs()


def match_operands(grammar: pp.ParserElement, text: str) -> tuple[int, ...]:
    return tuple(grammar.parse_string(text, parse_all=True))
