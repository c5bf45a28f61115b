"""Main CHIP-8 emulator execution engine."""

from typing import Callable, Dict, Tuple

import jax.numpy as jnp
from emul8.state import EmulatorState, RunState
from emul8.decode import DecodedInstruction, Op, decode, mnemonic
from emul8.errors import Chip8Error
from emul8.keypad import newly_pressed_key
from emul8.logging import get_logger
from emul8.memory import load_program, read_word
from emul8.instructions.system import execute_clear_screen, execute_return
from emul8.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from emul8.instructions.alu import execute_alu_operation
from emul8.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from emul8.instructions.display import execute_display
from emul8.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)

Handler = Callable[[EmulatorState, DecodedInstruction], EmulatorState]

logger = get_logger()

HANDLERS: Dict[Op, Handler] = {
    Op.CLEAR_SCREEN: execute_clear_screen,
    Op.RETURN: execute_return,
    Op.JUMP: execute_jump,
    Op.CALL: execute_call,
    Op.SKIP_IF_EQUAL_IMMEDIATE: execute_skip_if_equal_immediate,
    Op.SKIP_IF_NOT_EQUAL_IMMEDIATE: execute_skip_if_not_equal_immediate,
    Op.SKIP_IF_EQUAL_REGISTER: execute_skip_if_equal_register,
    Op.SET: execute_set,
    Op.ADD: execute_add,
    Op.ALU_SET: execute_alu_operation,
    Op.ALU_OR: execute_alu_operation,
    Op.ALU_AND: execute_alu_operation,
    Op.ALU_XOR: execute_alu_operation,
    Op.ALU_ADD: execute_alu_operation,
    Op.ALU_SUB_XY: execute_alu_operation,
    Op.ALU_SHIFT_RIGHT: execute_alu_operation,
    Op.ALU_SUB_YX: execute_alu_operation,
    Op.ALU_SHIFT_LEFT: execute_alu_operation,
    Op.SKIP_IF_NOT_EQUAL_REGISTER: execute_skip_if_not_equal_register,
    Op.SET_INDEX: execute_set_index,
    Op.JUMP_WITH_OFFSET: execute_jump_with_offset,
    Op.RANDOM: execute_random,
    Op.DISPLAY: execute_display,
    Op.SKIP_IF_KEY: execute_skip_if_key,
    Op.SKIP_IF_NOT_KEY: execute_skip_if_not_key,
    Op.GET_DELAY_TIMER: execute_get_delay_timer,
    Op.WAIT_FOR_KEY: execute_wait_for_key,
    Op.SET_DELAY_TIMER: execute_set_delay_timer,
    Op.SET_SOUND_TIMER: execute_set_sound_timer,
    Op.ADD_TO_INDEX: execute_add_to_index,
    Op.FONT_CHARACTER: execute_font_character,
    Op.BCD_CONVERSION: execute_bcd_conversion,
    Op.STORE_REGISTERS: execute_store_registers,
    Op.LOAD_REGISTERS: execute_load_registers,
}


def dispatch(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Run an already decoded instruction."""
    return HANDLERS[instruction.op](state, instruction)


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Raises:
        Chip8Error: If the instruction cannot be decoded or faults
    """
    return dispatch(state, decode(instruction))


def fetch(state: EmulatorState) -> Tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance PC past it."""
    pc = int(state.pc)
    instruction = read_word(state.memory, pc)
    return state.replace(pc=jnp.asarray(pc + 2, dtype=jnp.uint16)), instruction


def load_rom(state: EmulatorState, rom: bytes) -> EmulatorState:
    """Load ROM data into CHIP-8 memory at the configured program origin."""
    new_memory = load_program(state.memory, rom, state.config.program_start)
    return state.replace(memory=new_memory)


def resume_on_key(state: EmulatorState) -> EmulatorState:
    """Complete a pending FX0A once a key has gone down; no-op otherwise."""
    key = newly_pressed_key(state)
    if key is None:
        return state
    logger.debug(f"Key {key:X} pressed, V{state.waiting_register:X} = {key:X}")
    return state.replace(
        V=state.V.at[state.waiting_register].set(key),
        status=RunState.RUNNING,
    )


def step(state: EmulatorState, trace: bool = False) -> EmulatorState:
    """Run one machine cycle.

    A RUNNING machine fetches, advances PC by 2 and executes one instruction.
    A WAITING machine only polls the keypad. A HALTED machine is returned
    unchanged. A fault during the cycle discards its partial effects and
    returns the pre-cycle state marked HALTED with the error attached.
    """
    if state.status is RunState.HALTED:
        return state
    if state.status is RunState.WAITING:
        return resume_on_key(state)

    pc = int(state.pc)
    try:
        next_state, word = fetch(state)
        instruction = decode(word, address=pc)
        if trace:
            logger.instruction(pc, word, mnemonic(instruction))
        next_state = dispatch(next_state, instruction)
    except Chip8Error as error:
        logger.halt(pc, error)
        return state.replace(status=RunState.HALTED, fault=error)

    if next_state.status is RunState.WAITING:
        logger.debug(f"Waiting for key into V{next_state.waiting_register:X}")
    return next_state
