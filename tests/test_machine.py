"""Tests for the Machine lifecycle and fault handling."""

import jax.numpy as jnp
import numpy as np
import pytest
from emul8 import (
    Machine, MachineConfig, RunState, MachineNotLoaded, RomTooLarge,
    StackOverflow, StackUnderflow, UnknownOpcode, OutOfBounds
)
from emul8.logging import set_log_level
from conftest import assemble


class TestLifecycle:
    """Test load, reset and unloaded behaviour."""

    def test_step_before_load(self):
        machine = Machine()
        assert not machine.loaded
        with pytest.raises(MachineNotLoaded):
            machine.step()

    def test_rom_too_large_rejected(self):
        machine = Machine()
        with pytest.raises(RomTooLarge):
            machine.load(bytes(4096 - 0x200 + 1))
        assert not machine.loaded

    def test_failed_reload_keeps_previous_program(self, make_machine):
        machine = make_machine([0x6A05, 0x1202])
        with pytest.raises(RomTooLarge):
            machine.load(bytes(5000))
        assert machine.loaded
        machine.step()
        assert machine.state.V[0xA] == 5

    def test_reset_restores_initial_state(self, make_machine):
        machine = make_machine([0x6A05, 0x00E0, 0x1204])
        for _ in range(5):
            machine.step()
        machine.set_key(3, True)
        assert machine.state.V[0xA] == 5

        machine.reset()

        assert machine.state.V[0xA] == 0
        assert machine.state.pc == 0x200
        assert not machine.is_key_down(3)
        assert machine.status is RunState.RUNNING
        machine.step()
        assert machine.state.V[0xA] == 5

    def test_reset_unloaded(self):
        machine = Machine()
        machine.reset()
        assert not machine.loaded

    def test_snapshot_is_read_only_copy(self, make_machine):
        machine = make_machine([0x1200])
        pixels = machine.snapshot()
        assert pixels.shape == (32, 64)
        assert pixels.dtype == np.bool_
        with pytest.raises(ValueError):
            pixels[0, 0] = True


class TestExecution:
    """End-to-end execution through step()."""

    def test_clear_then_jump_to_self(self, make_machine):
        machine = make_machine([0x00E0, 0x1202])
        machine.step()
        before = machine.state

        for _ in range(1000):
            assert machine.step() is RunState.RUNNING

        after = machine.state
        assert after.pc == 0x202
        assert bool(jnp.array_equal(after.V, before.V))
        assert after.I == before.I
        assert after.stack.pointer == 0
        assert not machine.snapshot().any()

    def test_subroutine_round_trip(self, make_machine):
        machine = make_machine([
            0x2206,  # 200: CALL 206
            0x6B02,  # 202: LD VB, 2
            0x1204,  # 204: JP 204
            0x6A01,  # 206: LD VA, 1
            0x00EE,  # 208: RET
        ])
        for _ in range(6):
            machine.step()
        assert machine.state.V[0xA] == 1
        assert machine.state.V[0xB] == 2
        assert machine.state.pc == 0x204

    def test_draw_and_bcd_program(self, make_machine):
        machine = make_machine([
            0x607B,  # LD V0, 123
            0xA300,  # LD I, 0x300
            0xF033,  # LD B, V0
            0xF265,  # LD V2, [I]
            0x6100,  # LD V1, 0
            0xF229,  # LD F, V2 (digit 3)
            0xD115,  # DRW V1, V1, 5
            0x120E,  # JP 20E
        ])
        for _ in range(8):
            machine.step()
        assert [int(v) for v in machine.state.V[:3]] == [1, 0, 3]
        assert machine.snapshot()[0, :4].all()


class TestFaults:
    """Faults halt the machine and are never swallowed."""

    def test_unknown_opcode_halts(self, make_machine):
        machine = make_machine([0x6A05, 0xFFFF])
        machine.step()
        status = machine.step()

        assert status is RunState.HALTED
        assert isinstance(machine.fault, UnknownOpcode)
        assert machine.fault.opcode == 0xFFFF
        assert machine.fault.address == 0x202
        assert machine.state.pc == 0x202  # Points at the faulting word
        assert machine.state.V[0xA] == 5

    def test_halted_machine_stays_halted(self, make_machine):
        machine = make_machine([0x0123])
        machine.step()
        halted = machine.state
        machine.set_key(1, True)
        assert machine.step() is RunState.HALTED
        assert machine.state.pc == halted.pc

    def test_stack_overflow_halts(self, make_machine):
        machine = make_machine([0x2200])  # CALL 200 forever
        for _ in range(16):
            assert machine.step() is RunState.RUNNING
        assert machine.step() is RunState.HALTED
        assert isinstance(machine.fault, StackOverflow)
        assert machine.state.stack.pointer == 16

    def test_stack_overflow_halts_sooner_on_vip(self, make_machine):
        machine = make_machine([0x2200], config=MachineConfig.from_profile("cosmac-vip"))
        for _ in range(12):
            machine.step()
        assert machine.step() is RunState.HALTED
        assert isinstance(machine.fault, StackOverflow)

    def test_stack_underflow_halts(self, make_machine):
        machine = make_machine([0x00EE])
        assert machine.step() is RunState.HALTED
        assert isinstance(machine.fault, StackUnderflow)

    def test_fetch_past_end_of_memory_halts(self, make_machine):
        machine = make_machine([0x1FFF])
        machine.step()
        assert machine.step() is RunState.HALTED
        assert isinstance(machine.fault, OutOfBounds)

    def test_fault_is_logged(self, make_machine, capsys):
        set_log_level("ERROR")
        machine = make_machine([0xFFFF])
        machine.step()
        assert "Unknown opcode 0xFFFF" in capsys.readouterr().out


class TestInputAndTrace:
    """Keypad plumbing and instruction tracing."""

    def test_wait_for_key_through_machine(self, make_machine):
        machine = make_machine([0xF30A, 0x1202])
        assert machine.step() is RunState.WAITING
        for _ in range(10):
            assert machine.step() is RunState.WAITING

        machine.set_key(0xB, True)
        assert machine.step() is RunState.RUNNING
        assert machine.state.V[3] == 0xB

    def test_wait_ignores_key_held_before_it(self, make_machine):
        machine = make_machine([0xF30A, 0x1202])
        machine.set_key(7, True)
        assert machine.step() is RunState.WAITING
        assert machine.step() is RunState.WAITING
        assert machine.pressed_key() == 7
        assert machine.pressed_key(since_wait=True) is None

        machine.set_key(7, False)
        machine.set_key(7, True)
        assert machine.pressed_key(since_wait=True) == 7
        assert machine.step() is RunState.RUNNING
        assert machine.state.V[3] == 7

    def test_trace_logs_mnemonics(self, capsys):
        set_log_level("DEBUG")
        machine = Machine(trace=True)
        machine.load(assemble([0x00E0, 0x1202]))
        machine.step()
        assert "CLS" in capsys.readouterr().out
