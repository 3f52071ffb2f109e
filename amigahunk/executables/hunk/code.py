'''
This module helps to decode the machine instructions contained in code blocks.

Some examples here: <https://www.capstone-engine.org/lang_python.html>.
'''
from capstone import Cs, CS_ARCH_M68K, CS_MODE_BIG_ENDIAN, CS_MODE_M68K_000

from .blocks import CodeBlock


def disasm(code, start=0, mode=CS_MODE_M68K_000, detail: bool = False):
    md = Cs(CS_ARCH_M68K, CS_MODE_BIG_ENDIAN | mode)
    md.detail = detail

    for _ in md.disasm(code, start):
        yield _


def disasm_block(block: CodeBlock, start: int = 0):
    return disasm(block.code.value, start=start)
