import argparse
import os
import platform
import sys

from .asmgen    import AsmGen
from .program   import DEFAULT_BACKEND

EXPRESSION_START = '0123456789(+ \t\n\r\f\v'
VALUE_OPTIONS    = ('-o', '--output', '-b', '--backend')
NATIVE           = 'native'

class Tools:
    def __init__(self, reporter):
        self.reporter = reporter

    def parseargs(self, argv = None):
        """
        return the parsed command line: one expression and output options
        """
        parser = argparse.ArgumentParser(
            prog        = os.path.basename(sys.argv[0]),
            description = "compile an arithmetic expression to assembly",
        )

        parser.add_argument('expression', help = 'expression to compile, e.g. "2*(3+4)"')
        parser.add_argument('-b', '--backend',
                            choices = sorted(AsmGen.BACKENDS) + [NATIVE],
                            default = DEFAULT_BACKEND,
                            help    = f'target assembly, "{NATIVE}" for the host (default: {DEFAULT_BACKEND})')
        parser.add_argument('-o', '--output',
                            help    = 'write the assembly to OUTPUT instead of stdout')

        dump = parser.add_mutually_exclusive_group()
        dump.add_argument('--tokens', action = 'store_true',
                          help = 'print the token sequence and stop')
        dump.add_argument('--ast', action = 'store_true',
                          help = 'print the syntax tree and stop')
        dump.add_argument('--eval', action = 'store_true',
                          help = 'print the value of the expression and stop')

        # argparse takes "-(1+2)" or "-3+5" for an option; hide the dash.
        # option values such as "-o -1.s" are glued to their option instead
        args    = []
        escaped = set()
        for arg in (sys.argv[1:] if argv is None else argv):
            if args and args[-1] in VALUE_OPTIONS and arg[:1] == '-':
                opt = args.pop()
                args.append(f'{opt}={arg}' if opt.startswith('--') else opt + arg)
            elif arg[:1] == '-' and arg[1:2] and arg[1] in EXPRESSION_START:
                args.append(' ' + arg)
                escaped.add(args[-1])
            else:
                args.append(arg)

        aout = parser.parse_args(args)

        if aout.expression in escaped:
            aout.expression = aout.expression[1:]

        if aout.backend == NATIVE:
            system, machine = platform.system(), platform.machine()
            backend = AsmGen.select_backend(system, machine)
            if backend is None:
                parser.error(f"no backend for {system} {machine}")
            aout.backend = backend.NAME

        return aout

    def writeasm(self, asm, filename = None):
        """
        write the assembly to filename, or to stdout if there is none
        """
        if filename is None:
            sys.stdout.write(asm)
            return

        try:
            with open(filename, "w") as f:
                f.write(asm)

        except OSError as e:
            self.reporter.log(f"cannot write output file {filename}: {e}")
