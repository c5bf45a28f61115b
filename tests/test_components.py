"""Tests for the register file, stack, timers and keypad."""

import pytest
from emul8 import (
    create_state, MachineConfig, InvalidRegister, InvalidKey, OutOfBounds,
    StackOverflow, StackUnderflow
)
from emul8 import keypad, registers, stack, timers


class TestRegisters:
    """Test register file accessors."""

    def test_set_and_get(self, fresh_state):
        state = registers.set_register(fresh_state, 0xA, 0x7F)
        assert registers.get_register(state, 0xA) == 0x7F

    def test_values_truncated_to_byte(self, fresh_state):
        state = registers.set_register(fresh_state, 3, 0x1FF)
        assert registers.get_register(state, 3) == 0xFF

    @pytest.mark.parametrize("index", [-1, 16, 255])
    def test_invalid_register(self, fresh_state, index):
        with pytest.raises(InvalidRegister):
            registers.get_register(fresh_state, index)
        with pytest.raises(InvalidRegister):
            registers.set_register(fresh_state, index, 0)

    def test_index_register(self, fresh_state):
        state = registers.set_index(fresh_state, 0xFFF)
        assert registers.get_index(state) == 0xFFF

    def test_program_counter(self, fresh_state):
        assert registers.get_pc(fresh_state) == 0x200
        state = registers.set_pc(fresh_state, 0x400)
        assert registers.get_pc(state) == 0x400
        with pytest.raises(OutOfBounds):
            registers.set_pc(fresh_state, 0x1000)

    def test_eti_program_start(self):
        state = create_state(MachineConfig(program_start=0x600))
        assert registers.get_pc(state) == 0x600


class TestStack:
    """Test push/pop and the capacity limits."""

    def test_push_pop_order(self, fresh_state):
        s = stack.push(fresh_state.stack, 0x300)
        s = stack.push(s, 0x400)
        s, top = stack.pop(s)
        s, bottom = stack.pop(s)
        assert (top, bottom) == (0x400, 0x300)
        assert s.pointer == 0

    def test_sixteen_frames(self, fresh_state):
        s = fresh_state.stack
        for frame in range(16):
            s = stack.push(s, 0x200 + frame * 2)
        with pytest.raises(StackOverflow):
            stack.push(s, 0x300)

        for frame in reversed(range(16)):
            s, address = stack.pop(s)
            assert address == 0x200 + frame * 2
        assert s.pointer == 0
        with pytest.raises(StackUnderflow):
            stack.pop(s)

    def test_twelve_frame_profile(self, legacy_state):
        s = legacy_state.stack
        assert stack.depth(s) == 12
        for _ in range(12):
            s = stack.push(s, 0x200)
        with pytest.raises(StackOverflow) as excinfo:
            stack.push(s, 0x200)
        assert excinfo.value.depth == 12


class TestTimers:
    """Test timer countdown."""

    def test_delay_counts_down_to_zero(self, fresh_state):
        state = timers.set_delay(fresh_state, 5)
        for _ in range(5):
            state = timers.tick(state)
        assert timers.get_delay(state) == 0

        state = timers.tick(state)
        assert timers.get_delay(state) == 0

    def test_timers_independent(self, fresh_state):
        state = timers.set_delay(fresh_state, 3)
        state = timers.set_sound(state, 1)
        state = timers.tick(state)
        assert timers.get_delay(state) == 2
        assert timers.get_sound(state) == 0

    def test_sound_active(self, fresh_state):
        assert not timers.sound_active(fresh_state)
        state = timers.set_sound(fresh_state, 2)
        assert timers.sound_active(state)
        state = timers.tick(timers.tick(state))
        assert not timers.sound_active(state)

    def test_tick_at_zero_is_noop(self, fresh_state):
        state = timers.tick(fresh_state)
        assert timers.get_delay(state) == 0
        assert timers.get_sound(state) == 0


class TestKeypad:
    """Test key state."""

    def test_set_and_query(self, fresh_state):
        state = keypad.set_key(fresh_state, 0xC, True)
        assert keypad.is_key_down(state, 0xC)
        assert not keypad.is_key_down(state, 0xD)

        state = keypad.set_key(state, 0xC, False)
        assert not keypad.is_key_down(state, 0xC)

    def test_any_key_down(self, fresh_state):
        assert keypad.any_key_down(fresh_state) is None
        state = keypad.set_key(fresh_state, 9, True)
        state = keypad.set_key(state, 3, True)
        assert keypad.any_key_down(state) == 3

    def test_last_write_wins(self, fresh_state):
        state = keypad.set_key(fresh_state, 4, True)
        state = keypad.set_key(state, 4, False)
        assert keypad.any_key_down(state) is None

    def test_newly_pressed_key_skips_held_keys(self, fresh_state):
        state = keypad.set_key(fresh_state, 2, True)
        state = keypad.hold_current_keys(state)
        assert keypad.newly_pressed_key(state) is None

        state = keypad.set_key(state, 9, True)
        assert keypad.newly_pressed_key(state) == 9

    def test_release_rearms_held_key(self, fresh_state):
        state = keypad.hold_current_keys(keypad.set_key(fresh_state, 2, True))
        state = keypad.set_key(state, 2, False)
        assert not state.held_keys[2]

        state = keypad.set_key(state, 2, True)
        assert keypad.newly_pressed_key(state) == 2

    @pytest.mark.parametrize("key", [-1, 16])
    def test_invalid_key(self, fresh_state, key):
        with pytest.raises(InvalidKey):
            keypad.set_key(fresh_state, key, True)
        with pytest.raises(InvalidKey):
            keypad.is_key_down(fresh_state, key)

    def test_default_key_map_covers_keypad(self):
        assert sorted(keypad.DEFAULT_KEY_MAP.values()) == list(range(16))
