"""
Timer, key skip and key wait tests
"""
from conftest import execute, load_words


def test_set_and_read_delay_timer(cpu):
    cpu.v[3] = 9
    execute(cpu, 0xF315)
    # The cycle that set the timer also ticks it
    assert cpu.timers.delay == 8
    execute(cpu, 0xF407)
    assert cpu.v[4] == 8


def test_set_sound_timer(cpu):
    cpu.v[3] = 2
    execute(cpu, 0xF318)
    assert cpu.timers.sound == 1
    assert cpu.timers.sound_active


def test_delay_timer_stops_at_zero(cpu):
    load_words(cpu, 0x6000, 0x6000, 0x6000)
    cpu.timers.delay = 2
    cpu.step()
    cpu.step()
    assert cpu.timers.delay == 0
    cpu.step()
    assert cpu.timers.delay == 0


def test_sound_timer_ticks_down(cpu):
    load_words(cpu, 0x6000, 0x6000)
    cpu.timers.sound = 1
    cpu.step()
    assert cpu.timers.sound == 0
    assert not cpu.timers.sound_active


def test_skip_if_key_held(cpu):
    cpu.v[1] = 0xA
    cpu.keypad.press(0xA)
    execute(cpu, 0xE19E)
    assert cpu.pc == 0x204


def test_no_skip_if_key_not_held(cpu):
    cpu.v[1] = 0xA
    execute(cpu, 0xE19E)
    assert cpu.pc == 0x202


def test_skip_if_key_not_held(cpu):
    cpu.v[1] = 0x3
    execute(cpu, 0xE1A1)
    assert cpu.pc == 0x204

    cpu.pc = 0x200
    cpu.keypad.press(0x3)
    execute(cpu, 0xE1A1)
    assert cpu.pc == 0x202


def test_key_wait_repeats_until_key_held(cpu):
    load_words(cpu, 0xF50A)
    cpu.timers.delay = 10

    for _ in range(3):
        cpu.step()
        assert cpu.pc == 0x200
    assert cpu.timers.delay == 7

    cpu.keypad.press(0xC)
    cpu.keypad.press(0x4)
    cpu.step()
    assert cpu.v[5] == 0x4
    assert cpu.pc == 0x202


def test_keypad_release(cpu):
    cpu.keypad.press(2)
    cpu.keypad.release(2)
    assert cpu.keypad.first_pressed() is None


def test_key_skips_use_low_nibble_of_vx(cpu):
    cpu.v[1] = 0x1A
    cpu.keypad.press(0xA)
    execute(cpu, 0xE19E)
    assert cpu.pc == 0x204

    cpu.pc = 0x200
    execute(cpu, 0xE1A1)
    assert cpu.pc == 0x202
