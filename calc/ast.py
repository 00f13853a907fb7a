import dataclasses as dc
import enum

from typing import Optional as Opt

### AST CLASS ###

# Expression objects for the ast
# maintain the source offset for errors
# a node is either a Number (no children) or a BinaryOperation (two children);
# unary minus never reaches the tree, the parser rewrites it as 0 - x
# two transformers:
# evaluate() -> int, reference value with 64 bit machine semantics
# pprint()   -> str for display

WORD = 64

def wrap(value: int) -> int:
    """reduce value to a signed WORD-bit integer"""
    value &= (1 << WORD) - 1
    if value >> (WORD - 1):
        value -= 1 << WORD
    return value

class Operator(enum.Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'

    @property
    def opcode(self):
        return OPCODES[self]

    def apply(self, x: int, y: int) -> int:
        match self:
            case Operator.ADD:
                return wrap(x + y)
            case Operator.SUB:
                return wrap(x - y)
            case Operator.MUL:
                return wrap(x * y)
            case Operator.DIV:
                # truncate toward zero, like idiv / sdiv
                q = abs(x) // abs(y)
                return wrap(q if (x < 0) == (y < 0) else -q)

OPCODES = {
    Operator.ADD : 'add',
    Operator.SUB : 'sub',
    Operator.MUL : 'mul',
    Operator.DIV : 'div',
}

@dc.dataclass
class AST:
    position: Opt[int] = dc.field(kw_only = True, default = None, compare = False)

    def pprint(self):
        return "base ast"

    def evaluate(self):
        raise NotImplementedError(f"evaluate on {self.pprint()}")

@dc.dataclass
class Expression(AST):
    pass

@dc.dataclass
class Number(Expression):
    value: int

    def pprint(self):
        return str(self.value)

    def evaluate(self):
        return wrap(self.value)

@dc.dataclass
class BinaryOperation(Expression):
    operator: Operator
    left: Expression
    right: Expression

    def spine(self):
        """
        return the chain of left operations starting here, outermost first,
        and the leaf at its bottom
        """
        nodes, expr = [], self
        while isinstance(expr, BinaryOperation):
            nodes.append(expr)
            expr = expr.left
        return nodes, expr

    def pprint(self):
        nodes, leaf = self.spine()

        aout  = [f"({node.operator.value} " for node in nodes]
        aout += [leaf.pprint()]
        aout += [f" {node.right.pprint()})" for node in reversed(nodes)]
        return "".join(aout)

    def evaluate(self):
        nodes, leaf = self.spine()

        value = leaf.evaluate()
        for node in reversed(nodes):
            value = node.operator.apply(value, node.right.evaluate())
        return value
