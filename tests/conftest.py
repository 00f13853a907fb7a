import pytest

MASK = (1 << 64) - 1

def signed(value, bits = 64):
    value &= (1 << bits) - 1
    if value >> (bits - 1):
        value -= 1 << bits
    return value

def run_x64(asm):
    """
    execute the x64-linux (AT&T) output of the compiler and return %rax
    """
    regs  = {'%rax': 0, '%rdi': 0, '%rdx': 0}
    stack = []

    def value(operand):
        if operand.startswith('$'):
            return signed(int(operand[1:]))
        return regs[operand]

    for line in asm.splitlines():
        if line.endswith(':') or line.strip().startswith('.'):
            continue

        opcode, _, args = line.strip().partition('\t')
        args = [x.strip() for x in args.split(',')] if args else []

        match opcode, args:
            case 'pushq', [src]:
                stack.append(value(src))
            case 'popq', [dst]:
                regs[dst] = stack.pop()
            case 'movabsq', [src, dst]:
                regs[dst] = value(src)
            case 'addq', [src, dst]:
                regs[dst] = signed(regs[dst] + value(src))
            case 'subq', [src, dst]:
                regs[dst] = signed(regs[dst] - value(src))
            case 'imulq', [src, dst]:
                regs[dst] = signed(regs[dst] * value(src))
            case 'cqto', []:
                regs['%rdx'] = -1 if regs['%rax'] < 0 else 0
            case 'idivq', [src]:
                dividend = signed(((regs['%rdx'] & MASK) << 64) | (regs['%rax'] & MASK), 128)
                divisor  = value(src)
                quotient = abs(dividend) // abs(divisor)
                if (dividend < 0) != (divisor < 0):
                    quotient = -quotient
                regs['%rdx'] = signed(dividend - quotient * divisor)
                regs['%rax'] = signed(quotient)
            case 'retq', []:
                assert stack == [], "stack not balanced on return"
                return regs['%rax']
            case _:
                raise AssertionError(f"unknown instruction: {line!r}")

    raise AssertionError("program does not return")

@pytest.fixture
def run_asm():
    return run_x64
