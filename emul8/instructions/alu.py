"""CHIP-8 ALU operations (8xxx).

Each operation maps ``(vx, vy)`` to ``(result, vf)``. A ``vf`` of None
leaves VF untouched. The flag is written after the result, so it wins
when X is F.
"""

from typing import Optional, Tuple

from emul8.config import ShiftSource
from emul8.constants import BYTE_MASK, FLAG_REGISTER
from emul8.state import EmulatorState
from emul8.decode import DecodedInstruction, Op

AluResult = Tuple[int, Optional[int]]


def alu_set(vx: int, vy: int) -> AluResult:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> AluResult:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> AluResult:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> AluResult:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> AluResult:
    """8XY4 - Add: VX += VY, VF = carry."""
    result = vx + vy
    return result & BYTE_MASK, int(result > BYTE_MASK)


def alu_sub_xy(vx: int, vy: int) -> AluResult:
    """8XY5 - Subtract: VX -= VY, VF = 1 when no borrow."""
    return (vx - vy) & BYTE_MASK, int(vx >= vy)


def alu_shift_right(vx: int, vy: int) -> AluResult:
    """8XY6 - Shift right: VX >>= 1, VF = bit shifted out."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> AluResult:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when no borrow."""
    return (vy - vx) & BYTE_MASK, int(vy >= vx)


def alu_shift_left(vx: int, vy: int) -> AluResult:
    """8XYE - Shift left: VX <<= 1, VF = bit shifted out."""
    return (vx << 1) & BYTE_MASK, (vx & 0x80) >> 7


ALU_OPERATIONS = {
    Op.ALU_SET: alu_set,
    Op.ALU_OR: alu_or,
    Op.ALU_AND: alu_and,
    Op.ALU_XOR: alu_xor,
    Op.ALU_ADD: alu_add,
    Op.ALU_SUB_XY: alu_sub_xy,
    Op.ALU_SHIFT_RIGHT: alu_shift_right,
    Op.ALU_SUB_YX: alu_sub_yx,
    Op.ALU_SHIFT_LEFT: alu_shift_left,
}

_SHIFT_OPS = (Op.ALU_SHIFT_RIGHT, Op.ALU_SHIFT_LEFT)
_LOGIC_OPS = (Op.ALU_OR, Op.ALU_AND, Op.ALU_XOR)


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    vx = int(state.V[instruction.x])
    vy = int(state.V[instruction.y])

    if instruction.op in _SHIFT_OPS and state.config.shift_quirk is ShiftSource.VY:
        vx = vy

    result, vf = ALU_OPERATIONS[instruction.op](vx, vy)
    if vf is None and instruction.op in _LOGIC_OPS and state.config.logic_resets_vf:
        vf = 0

    new_V = state.V.at[instruction.x].set(result)
    if vf is not None:
        new_V = new_V.at[FLAG_REGISTER].set(vf)
    return state.replace(V=new_V)
