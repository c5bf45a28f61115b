"""Tests for miscellaneous instructions (Fxxx)."""

import pytest
from emul8 import execute, step, RunState, OutOfBounds
from emul8.constants import FONT_START
from emul8.keypad import set_key
from emul8.memory import load_program
from conftest import assemble


class TestTimers:
    """Test timer-related instructions."""

    def test_misc_timer_instructions(self, fresh_state):
        state = execute(fresh_state, 0x6030)  # V0 = 48
        state = execute(state, 0xF015)  # Set delay timer to V0
        assert state.delay_timer == 48

        state = execute(state, 0x6120)  # V1 = 32
        state = execute(state, 0xF118)  # Set sound timer to V1
        assert state.sound_timer == 32

        state = execute(state, 0xF207)  # V2 = delay timer
        assert state.V[2] == 48


class TestBCD:
    """Test BCD conversion."""

    @pytest.mark.parametrize("value,digits", [
        (156, (1, 5, 6)),
        (0, (0, 0, 0)),
        (255, (2, 5, 5)),
        (7, (0, 0, 7)),
    ])
    def test_misc_bcd_conversion(self, fresh_state, value, digits):
        state = execute(fresh_state, 0x6000 | value)
        state = execute(state, 0xA300)
        state = execute(state, 0xF033)

        assert (int(state.memory[0x300]), int(state.memory[0x301]), int(state.memory[0x302])) == digits

    def test_bcd_past_end_of_memory(self, fresh_state):
        state = execute(fresh_state, 0xAFFE)
        with pytest.raises(OutOfBounds):
            execute(state, 0xF033)


class TestIndex:
    """Test font addressing and index arithmetic."""

    def test_misc_font_character(self, fresh_state):
        state = execute(fresh_state, 0x600A)  # V0 = 0xA
        state = execute(state, 0xF029)

        assert state.I == FONT_START + 0xA * 5

    def test_font_character_uses_low_nibble(self, fresh_state):
        state = execute(fresh_state, 0x6013)
        state = execute(state, 0xF029)
        assert state.I == FONT_START + 3 * 5

    def test_add_to_index(self, fresh_state):
        state = execute(fresh_state, 0xA100)
        state = execute(state, 0x6310)
        state = execute(state, 0xF31E)
        assert state.I == 0x110
        assert state.V[15] == 0


class TestRegisterBlocks:
    """Test FX55/FX65 and the index increment quirk."""

    def test_store_registers(self, modern_state):
        state = execute(modern_state, 0x6011)
        state = execute(state, 0x6122)
        state = execute(state, 0x6233)
        state = execute(state, 0x6344)
        state = execute(state, 0xA400)
        state = execute(state, 0xF255)  # Store V0..V2

        assert [int(v) for v in state.memory[0x400:0x404]] == [0x11, 0x22, 0x33, 0x00]
        assert state.I == 0x400

    def test_load_registers(self, modern_state):
        state = modern_state.replace(memory=load_program(modern_state.memory, b"\x01\x02\x03\x04"))
        state = execute(state, 0xA200)
        state = execute(state, 0xF265)  # Load V0..V2

        assert [int(v) for v in state.V[:4]] == [1, 2, 3, 0]
        assert state.I == 0x200

    def test_store_increments_index_on_vip(self, legacy_state):
        state = execute(legacy_state, 0xA400)
        state = execute(state, 0xF355)
        assert state.I == 0x404

    def test_load_increments_index_on_vip(self, legacy_state):
        state = execute(legacy_state, 0xA400)
        state = execute(state, 0xF065)
        assert state.I == 0x401

    def test_store_past_end_of_memory(self, fresh_state):
        state = execute(fresh_state, 0xAFFE)
        with pytest.raises(OutOfBounds):
            execute(state, 0xF255)


class TestWaitForKey:
    """Test FX0A suspend semantics through step()."""

    def _waiting_state(self, state):
        rom = assemble([0xF50A, 0x6701])  # LD V5, K ; LD V7, 1
        state = state.replace(memory=load_program(state.memory, rom))
        return step(state)

    def test_enters_waiting(self, fresh_state):
        state = self._waiting_state(fresh_state)
        assert state.status is RunState.WAITING
        assert state.waiting_register == 5
        assert state.pc == 0x202

    def test_no_progress_without_key(self, fresh_state):
        state = self._waiting_state(fresh_state)
        for _ in range(20):
            state = step(state)
        assert state.status is RunState.WAITING
        assert state.pc == 0x202
        assert state.V[7] == 0

    def test_key_press_resumes(self, fresh_state):
        state = self._waiting_state(fresh_state)
        state = step(set_key(state, 5, True))

        assert state.status is RunState.RUNNING
        assert state.V[5] == 5
        assert state.pc == 0x202

        state = step(state)
        assert state.V[7] == 1
        assert state.pc == 0x204
