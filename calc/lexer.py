import dataclasses as dc
import enum
import ply.lex
import re

from typing import Optional as Opt

from .reporter import LexError

# largest literal the 64-bit targets can push
INT_MAX = (1 << 63) - 1

class TokenKind(enum.Enum):
    RESERVED = 0        # one of + - * / ( )
    NUM      = 1        # integer literal
    EOF      = 2        # end of input

@dc.dataclass(frozen = True)
class Token:
    kind        : TokenKind
    text        : str
    position    : int
    value       : Opt[int] = None

    def pprint(self):
        match self.kind:
            case TokenKind.NUM:
                return f"NUM {self.value}"
            case TokenKind.EOF:
                return "EOF"
            case _:
                return f"RESERVED '{self.text}'"

class Lexer:
    tokens = (
        'NUMBER',               # : str, digits only

        # Punctuation
        'LPAREN'       ,
        'RPAREN'       ,
        'DASH'         ,
        'PLUS'         ,
        'SLASH'        ,
        'STAR'         ,
    )

    t_LPAREN    = re.escape('(')
    t_RPAREN    = re.escape(')')
    t_DASH      = re.escape('-')
    t_PLUS      = re.escape('+')
    t_SLASH     = re.escape('/')
    t_STAR      = re.escape('*')

    t_ignore = ' \t\n\r\f\v'    # Ignore all whitespaces

    def __init__(self):
        self.lexer    = ply.lex.lex(module = self)

    def t_NUMBER(self, t):
        r'[0-9]+'
        if int(t.value) > INT_MAX:
            raise LexError(f"integer literal out of range: {t.value}",
                           position = t.lexpos)
        return t

    def t_error(self, t):
        offset = len(t.lexer.lexdata[:t.lexpos].encode('utf-8'))
        raise LexError(f"illegal character '{t.value[0]}' at byte offset {offset}",
                       position = t.lexpos)

    def tokenize(self, data: str) -> list[Token]:
        """
        return the token sequence of data, always ended by an EOF token
        """
        self.lexer.input(data)

        aout = []
        for tok in iter(self.lexer.token, None):
            if tok.type == 'NUMBER':
                aout.append(Token(TokenKind.NUM, tok.value, tok.lexpos, int(tok.value)))
            else:
                aout.append(Token(TokenKind.RESERVED, tok.value, tok.lexpos))

        aout.append(Token(TokenKind.EOF, "", len(data)))
        return aout
