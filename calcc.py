from calc.asmgen   import AsmGen
from calc.lexer    import Lexer
from calc.parser   import parse
from calc.reporter import Reporter, Error
from calc.tools    import Tools

def main(argv = None):
    """
    usage:
    python3 calcc.py [-b backend] [-o file.s] "<expression>"

    prints the assembly of a program returning the value of <expression>
    """
    # preliminary objects
    reporter    = Reporter()
    tools       = Tools(reporter)

    # parse args
    reporter.checkpoint("args")
    args = tools.parseargs(argv)
    reporter.source = args.expression

    try:
        # text to tokens
        reporter.checkpoint("lexing")
        tokens = Lexer().tokenize(args.expression)

        if args.tokens:
            print("\n".join(tok.pprint() for tok in tokens))
            return 0

        # tokens to ast
        reporter.checkpoint("parsing")
        tree = parse(tokens)

        if args.ast:
            print(tree.pprint())
            return 0

        if args.eval:
            reporter.checkpoint("eval")
            print(tree.evaluate())
            return 0

    except Error as e:
        reporter.crash(e)

    except ZeroDivisionError:
        reporter.crash("division by zero")

    # ast to asm
    reporter.checkpoint("asm gen")
    asm = AsmGen.get_backend(args.backend).lower(tree)

    reporter.checkpoint("asm wr")
    tools.writeasm(asm, args.output)

    reporter.checkpoint("end")
    return 0


if __name__ == "__main__":
    main()
