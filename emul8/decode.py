"""CHIP-8 instruction decoding."""

import enum
from typing import Optional

from chex import dataclass

from emul8.errors import UnknownOpcode


class Op(enum.Enum):
    """Closed set of supported instruction forms."""
    CLEAR_SCREEN = "00E0"
    RETURN = "00EE"
    JUMP = "1NNN"
    CALL = "2NNN"
    SKIP_IF_EQUAL_IMMEDIATE = "3XNN"
    SKIP_IF_NOT_EQUAL_IMMEDIATE = "4XNN"
    SKIP_IF_EQUAL_REGISTER = "5XY0"
    SET = "6XNN"
    ADD = "7XNN"
    ALU_SET = "8XY0"
    ALU_OR = "8XY1"
    ALU_AND = "8XY2"
    ALU_XOR = "8XY3"
    ALU_ADD = "8XY4"
    ALU_SUB_XY = "8XY5"
    ALU_SHIFT_RIGHT = "8XY6"
    ALU_SUB_YX = "8XY7"
    ALU_SHIFT_LEFT = "8XYE"
    SKIP_IF_NOT_EQUAL_REGISTER = "9XY0"
    SET_INDEX = "ANNN"
    JUMP_WITH_OFFSET = "BNNN"
    RANDOM = "CXNN"
    DISPLAY = "DXYN"
    SKIP_IF_KEY = "EX9E"
    SKIP_IF_NOT_KEY = "EXA1"
    GET_DELAY_TIMER = "FX07"
    WAIT_FOR_KEY = "FX0A"
    SET_DELAY_TIMER = "FX15"
    SET_SOUND_TIMER = "FX18"
    ADD_TO_INDEX = "FX1E"
    FONT_CHARACTER = "FX29"
    BCD_CONVERSION = "FX33"
    STORE_REGISTERS = "FX55"
    LOAD_REGISTERS = "FX65"


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    op: Op
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


_ALU_OPS = {
    0x0: Op.ALU_SET,
    0x1: Op.ALU_OR,
    0x2: Op.ALU_AND,
    0x3: Op.ALU_XOR,
    0x4: Op.ALU_ADD,
    0x5: Op.ALU_SUB_XY,
    0x6: Op.ALU_SHIFT_RIGHT,
    0x7: Op.ALU_SUB_YX,
    0xE: Op.ALU_SHIFT_LEFT,
}

_KEY_OPS = {
    0x9E: Op.SKIP_IF_KEY,
    0xA1: Op.SKIP_IF_NOT_KEY,
}

_MISC_OPS = {
    0x07: Op.GET_DELAY_TIMER,
    0x0A: Op.WAIT_FOR_KEY,
    0x15: Op.SET_DELAY_TIMER,
    0x18: Op.SET_SOUND_TIMER,
    0x1E: Op.ADD_TO_INDEX,
    0x29: Op.FONT_CHARACTER,
    0x33: Op.BCD_CONVERSION,
    0x55: Op.STORE_REGISTERS,
    0x65: Op.LOAD_REGISTERS,
}

# Groups fully identified by their high nibble
_FIXED_OPS = {
    0x1: Op.JUMP,
    0x2: Op.CALL,
    0x3: Op.SKIP_IF_EQUAL_IMMEDIATE,
    0x4: Op.SKIP_IF_NOT_EQUAL_IMMEDIATE,
    0x6: Op.SET,
    0x7: Op.ADD,
    0xA: Op.SET_INDEX,
    0xB: Op.JUMP_WITH_OFFSET,
    0xC: Op.RANDOM,
    0xD: Op.DISPLAY,
}


def classify(instruction: int) -> Optional[Op]:
    """Map a 16-bit word to its instruction form, or None if unsupported."""
    group = (instruction & 0xF000) >> 12
    n = instruction & 0x000F
    nn = instruction & 0x00FF

    if group in _FIXED_OPS:
        return _FIXED_OPS[group]
    if group == 0x0:
        # 0NNN (native machine-code routine) is not supported
        if instruction == 0x00E0:
            return Op.CLEAR_SCREEN
        if instruction == 0x00EE:
            return Op.RETURN
        return None
    if group == 0x5:
        return Op.SKIP_IF_EQUAL_REGISTER if n == 0 else None
    if group == 0x8:
        return _ALU_OPS.get(n)
    if group == 0x9:
        return Op.SKIP_IF_NOT_EQUAL_REGISTER if n == 0 else None
    if group == 0xE:
        return _KEY_OPS.get(nn)
    return _MISC_OPS.get(nn)


def decode(instruction: int, address: Optional[int] = None) -> DecodedInstruction:
    """Decode 16-bit instruction into components.

    Args:
        instruction: Raw instruction word
        address: Where the word was fetched from, reported on failure

    Raises:
        UnknownOpcode: If the word is not a supported instruction
    """
    instruction = int(instruction)
    op = classify(instruction)
    if op is None:
        raise UnknownOpcode(instruction, address)

    return DecodedInstruction(
        raw=instruction,
        op=op,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )


_MNEMONICS = {
    Op.CLEAR_SCREEN: "CLS",
    Op.RETURN: "RET",
    Op.JUMP: "JP {nnn:#05x}",
    Op.CALL: "CALL {nnn:#05x}",
    Op.SKIP_IF_EQUAL_IMMEDIATE: "SE V{x:X}, {nn:#04x}",
    Op.SKIP_IF_NOT_EQUAL_IMMEDIATE: "SNE V{x:X}, {nn:#04x}",
    Op.SKIP_IF_EQUAL_REGISTER: "SE V{x:X}, V{y:X}",
    Op.SET: "LD V{x:X}, {nn:#04x}",
    Op.ADD: "ADD V{x:X}, {nn:#04x}",
    Op.ALU_SET: "LD V{x:X}, V{y:X}",
    Op.ALU_OR: "OR V{x:X}, V{y:X}",
    Op.ALU_AND: "AND V{x:X}, V{y:X}",
    Op.ALU_XOR: "XOR V{x:X}, V{y:X}",
    Op.ALU_ADD: "ADD V{x:X}, V{y:X}",
    Op.ALU_SUB_XY: "SUB V{x:X}, V{y:X}",
    Op.ALU_SHIFT_RIGHT: "SHR V{x:X}, V{y:X}",
    Op.ALU_SUB_YX: "SUBN V{x:X}, V{y:X}",
    Op.ALU_SHIFT_LEFT: "SHL V{x:X}, V{y:X}",
    Op.SKIP_IF_NOT_EQUAL_REGISTER: "SNE V{x:X}, V{y:X}",
    Op.SET_INDEX: "LD I, {nnn:#05x}",
    Op.JUMP_WITH_OFFSET: "JP V0, {nnn:#05x}",
    Op.RANDOM: "RND V{x:X}, {nn:#04x}",
    Op.DISPLAY: "DRW V{x:X}, V{y:X}, {n}",
    Op.SKIP_IF_KEY: "SKP V{x:X}",
    Op.SKIP_IF_NOT_KEY: "SKNP V{x:X}",
    Op.GET_DELAY_TIMER: "LD V{x:X}, DT",
    Op.WAIT_FOR_KEY: "LD V{x:X}, K",
    Op.SET_DELAY_TIMER: "LD DT, V{x:X}",
    Op.SET_SOUND_TIMER: "LD ST, V{x:X}",
    Op.ADD_TO_INDEX: "ADD I, V{x:X}",
    Op.FONT_CHARACTER: "LD F, V{x:X}",
    Op.BCD_CONVERSION: "LD B, V{x:X}",
    Op.STORE_REGISTERS: "LD [I], V{x:X}",
    Op.LOAD_REGISTERS: "LD V{x:X}, [I]",
}


def mnemonic(instruction: DecodedInstruction) -> str:
    """Render an instruction in conventional CHIP-8 assembly syntax."""
    return _MNEMONICS[instruction.op].format(
        x=instruction.x,
        y=instruction.y,
        n=instruction.n,
        nn=instruction.nn,
        nnn=instruction.nnn,
    )
