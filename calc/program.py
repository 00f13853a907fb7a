from .asmgen    import AsmGen
from .lexer     import Lexer
from .parser    import parse

### PROGRAM ###

# source text -> tokens -> ast -> assembly
# LexError and ParseError propagate untouched: nothing is produced on failure

DEFAULT_BACKEND = 'x64-linux'

def translate(source: str, backend: str = DEFAULT_BACKEND) -> str:
    tokens  = Lexer().tokenize(source)
    tree    = parse(tokens)
    return AsmGen.get_backend(backend).lower(tree)
