# --------------------------------------------------------------------
import abc

from .ast import *

# --------------------------------------------------------------------
class AsmGen(abc.ABC):
    """
    lower an expression tree to a stack machine program

    every literal is pushed on the machine stack; every operation pops its
    right then left operand into SECONDARY and PRIMARY, combines them into
    PRIMARY and pushes the result back. the last value left on the stack is
    popped into PRIMARY, which is also the return register.
    """
    BACKENDS   = {}
    NAME       = None
    SYSTEM     = None
    MACHINE    = None
    ENTRY      = 'main'
    PRIMARY    = None
    SECONDARY  = None

    def __init__(self):
        self._asm = []

    def _get_asm(self, opcode, *args):
        if not args:
            return f'\t{opcode}'
        return f'\t{opcode}\t{", ".join(args)}'

    def _get_label(self, lbl):
        return f'{lbl}:'

    def _emit(self, opcode, *args):
        self._asm.append(self._get_asm(opcode, *args))

    def for_expression(self, expr: Expression):
        # "1+2+...+n" is a left spine as deep as the chain is long: walk it
        # with a loop, only right operands recurse
        spine = []
        if isinstance(expr, BinaryOperation):
            spine, expr = expr.spine()

        match expr:
            case Number(value):
                self._emit_const(value)

            case _:
                assert False, f'not an expression: {expr!r}'

        for node in reversed(spine):
            self.for_expression(node.right)
            self._emit_pop(self.SECONDARY)
            self._emit_pop(self.PRIMARY)
            getattr(self, f'_emit_{node.operator.opcode}')()
            self._emit_push(self.PRIMARY)

    @abc.abstractmethod
    def _prologue(self) -> list[str]:
        pass

    @abc.abstractmethod
    def _emit_const(self, ctt):
        pass

    @abc.abstractmethod
    def _emit_push(self, reg):
        pass

    @abc.abstractmethod
    def _emit_pop(self, reg):
        pass

    @abc.abstractmethod
    def _emit_ret(self):
        pass

    @classmethod
    def lower(cls, expr: Expression) -> str:
        emitter = cls()
        emitter.for_expression(expr)
        emitter._emit_pop(emitter.PRIMARY)
        emitter._emit_ret()

        aout = emitter._prologue() + emitter._asm
        return "\n".join(aout) + "\n"

    @classmethod
    def get_backend(cls, name):
        return cls.BACKENDS[name]

    @classmethod
    def select_backend(cls, system: str, machine: str):
        for backend in cls.BACKENDS.values():
            if system == backend.SYSTEM and machine == backend.MACHINE:
                return backend
        return None

    @classmethod
    def register(cls, backend):
        cls.BACKENDS[backend.NAME] = backend
        return backend

# --------------------------------------------------------------------
class AsmGen_x64_Linux(AsmGen):
    NAME       = 'x64-linux'
    SYSTEM     = 'Linux'
    MACHINE    = 'x86_64'
    PRIMARY    = '%rax'
    SECONDARY  = '%rdi'

    def _prologue(self):
        return [
            self._get_asm('.text'),
            self._get_asm('.globl', self.ENTRY),
            self._get_label(self.ENTRY),
        ]

    def _emit_const(self, ctt):
        # pushq only takes a sign-extended 32 bit immediate
        if -(1 << 31) <= ctt < (1 << 31):
            self._emit('pushq', f'${ctt}')
        else:
            self._emit('movabsq', f'${ctt}', self.PRIMARY)
            self._emit_push(self.PRIMARY)

    def _emit_push(self, reg):
        self._emit('pushq', reg)

    def _emit_pop(self, reg):
        self._emit('popq', reg)

    def _emit_add(self):
        self._emit('addq', self.SECONDARY, self.PRIMARY)

    def _emit_sub(self):
        self._emit('subq', self.SECONDARY, self.PRIMARY)

    def _emit_mul(self):
        self._emit('imulq', self.SECONDARY, self.PRIMARY)

    def _emit_div(self):
        self._emit('cqto')
        self._emit('idivq', self.SECONDARY)

    def _emit_ret(self):
        self._emit('retq')

AsmGen.register(AsmGen_x64_Linux)

# --------------------------------------------------------------------
class AsmGen_x64_Intel(AsmGen_x64_Linux):
    NAME       = 'x64-intel'
    SYSTEM     = None
    MACHINE    = None
    PRIMARY    = 'rax'
    SECONDARY  = 'rdi'

    def _prologue(self):
        return [
            self._get_asm('.intel_syntax noprefix'),
            self._get_asm('.globl', self.ENTRY),
            self._get_label(self.ENTRY),
        ]

    def _emit_const(self, ctt):
        if -(1 << 31) <= ctt < (1 << 31):
            self._emit('push', str(ctt))
        else:
            self._emit('mov', self.PRIMARY, str(ctt))
            self._emit_push(self.PRIMARY)

    def _emit_push(self, reg):
        self._emit('push', reg)

    def _emit_pop(self, reg):
        self._emit('pop', reg)

    def _emit_add(self):
        self._emit('add', self.PRIMARY, self.SECONDARY)

    def _emit_sub(self):
        self._emit('sub', self.PRIMARY, self.SECONDARY)

    def _emit_mul(self):
        self._emit('imul', self.PRIMARY, self.SECONDARY)

    def _emit_div(self):
        self._emit('cqo')
        self._emit('idiv', self.SECONDARY)

    def _emit_ret(self):
        self._emit('ret')

AsmGen.register(AsmGen_x64_Intel)

# --------------------------------------------------------------------
class AsmGen_arm64_Darwin(AsmGen):
    NAME       = 'arm64-apple-darwin'
    SYSTEM     = 'Darwin'
    MACHINE    = 'arm64'
    ENTRY      = '_main'
    PRIMARY    = 'X0'
    SECONDARY  = 'X1'

    def _prologue(self):
        return [
            self._get_asm('.text'),
            self._get_asm('.globl', self.ENTRY),
            self._get_asm('.p2align', '2'),
            self._get_label(self.ENTRY),
        ]

    def _emit_const(self, ctt):
        if ctt < 0:
            ctt = (1 << 64) + ctt
        self._emit('movz', 'X9', f'#{ctt & 0xffff}')
        ctt, i = (ctt >> 16), 1
        while ctt != 0:
            self._emit('movk', 'X9', f'#{ctt & 0xffff}', f'lsl {16*i}')
            ctt >>= 16; i += 1
        self._emit_push('X9')

    # SP must stay 16 byte aligned, one slot per value
    def _emit_push(self, reg):
        self._emit('str', reg, '[SP, #-16]!')

    def _emit_pop(self, reg):
        self._emit('ldr', reg, '[SP]', '#16')

    def _emit_alu2(self, opcode):
        self._emit(opcode, self.PRIMARY, self.PRIMARY, self.SECONDARY)

    def _emit_add(self):
        self._emit_alu2('add')

    def _emit_sub(self):
        self._emit_alu2('sub')

    def _emit_mul(self):
        self._emit_alu2('mul')

    def _emit_div(self):
        self._emit_alu2('sdiv')

    def _emit_ret(self):
        self._emit('ret')

AsmGen.register(AsmGen_arm64_Darwin)
