from .ast       import *
from .lexer     import Token, TokenKind
from .reporter  import ParseError

### PARSER ###

# recursive descent, one method per grammar rule, lowest precedence first:
#
#   expr    := mul ( ('+' | '-') mul )*
#   mul     := unary ( ('*' | '/') unary )*
#   unary   := ('+' | '-')? primary
#   primary := NUMBER | '(' expr ')'
#
# the parser owns the only cursor into the token list; every rule either
# consumes the tokens it matched or leaves the cursor where it was

BINARY = {
    '+' : Operator.ADD,
    '-' : Operator.SUB,
    '*' : Operator.MUL,
    '/' : Operator.DIV,
}

class Parser:
    def __init__(self, tokens: list[Token]):
        assert(tokens and tokens[-1].kind == TokenKind.EOF)
        self.tokens = tokens
        self.pos    = 0

    @property
    def token(self) -> Token:
        return self.tokens[self.pos]

    def found(self):
        if self.token.kind == TokenKind.EOF:
            return "end of input"
        return f"'{self.token.text}'"

    def error(self, expected):
        return ParseError(f"expected {expected}, found {self.found()}",
                          position = self.token.position)

    def consume(self, op: str) -> bool:
        if self.token.kind != TokenKind.RESERVED or self.token.text != op:
            return False

        self.pos += 1
        return True

    def expect(self, op: str):
        if not self.consume(op):
            raise self.error(f"'{op}'")

    def expect_number(self) -> Token:
        if self.token.kind != TokenKind.NUM:
            raise self.error("a number")

        token = self.token
        self.pos += 1
        return token

    def at_eof(self) -> bool:
        return self.token.kind == TokenKind.EOF

    def parse(self) -> Expression:
        try:
            node = self.expr()
        except RecursionError:
            raise ParseError("expression nested too deeply",
                             position = self.token.position) from None

        if not self.at_eof():
            raise self.error("end of input")

        return node

    def binary(self, operand, ops):
        node = operand()

        while True:
            position = self.token.position
            for op in ops:
                if self.consume(op):
                    node = BinaryOperation(BINARY[op], node, operand(),
                                           position = position)
                    break
            else:
                return node

    def expr(self):
        return self.binary(self.mul, '+-')

    def mul(self):
        return self.binary(self.unary, '*/')

    def unary(self):
        position = self.token.position

        if self.consume('+'):
            return self.primary()

        if self.consume('-'):
            return BinaryOperation(Operator.SUB,
                                   Number(0, position = position),
                                   self.primary(),
                                   position = position)

        return self.primary()

    def primary(self):
        if self.consume('('):
            node = self.expr()
            self.expect(')')
            return node

        token = self.expect_number()
        return Number(token.value, position = token.position)

def parse(tokens: list[Token]) -> Expression:
    """
    return the ast root of a token list ended by EOF
    """
    return Parser(tokens).parse()
