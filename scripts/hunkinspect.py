#!/usr/bin/env python3
'''
Dump the structure of an AmigaOS Hunk executable.

 $ DEBUG=1 hunkinspect.py -d /path/to/executable
'''
import os
import sys
import logging

from amigahunk.report import inspect_file


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'usage: {progname} [-d|--disasm] <file>')
    return 0


def main(argv):
    print('Amiga Inspect')

    args = argv[1:]
    disassemble = False
    if args and args[0] in ('-d', '--disasm'):
        disassemble = True
        args = args[1:]

    if len(args) != 1:
        return usage(argv[0])

    path = args[0]

    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        logger.error(f'cannot read \'{path}\': {e}')
        return 1

    print(f'Opening file {path} ...')

    return inspect_file(data, disassemble=disassemble)


if __name__ == '__main__':
    sys.exit(main(sys.argv))
