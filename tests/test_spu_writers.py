import math

import pytest

from vircon.spu import ChannelState, Sample, SPUCommand, SPUPort, V32SPU
from vircon.spu_writers import (
    write_channel_assigned_sound,
    write_channel_loop_enabled,
    write_channel_position,
    write_channel_speed,
    write_channel_volume,
    write_command,
    write_global_volume,
    write_port,
    write_selected_channel,
    write_selected_sound,
    write_sound_loop_end,
    write_sound_loop_start,
    write_sound_play_with_loop,
)
from vircon.timer import PortAccessError
from vircon.word import float_to_word, to_signed

SOUND_LENGTH = 10


def make_spu():
    spu = V32SPU(channels=4, max_cartridge_sounds=4, samples_per_frame=8)
    samples = [Sample(i, -i) for i in range(SOUND_LENGTH)]
    spu.load_sound(spu.bios_sound, samples)
    spu.load_sound(spu.cartridge_sounds[0], samples)
    spu.load_sound(spu.cartridge_sounds[1], samples)
    spu.loaded_cartridge_sounds = 2
    return spu


def test_global_volume_valid_value():
    spu = make_spu()
    write_global_volume(spu, float_to_word(1.5))
    assert spu.global_volume == 1.5


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_global_volume_ignores_nan_and_infinity(bad):
    spu = make_spu()
    write_global_volume(spu, float_to_word(0.25))
    write_global_volume(spu, float_to_word(bad))
    assert spu.global_volume == 0.25


def test_global_volume_clamped_high_and_low():
    spu = make_spu()
    write_global_volume(spu, float_to_word(5.0))
    assert spu.global_volume == 2.0
    write_global_volume(spu, float_to_word(-3.0))
    assert 0 <= spu.global_volume < 0.25


def test_selected_sound_points_to_cartridge_and_bios():
    spu = make_spu()
    write_selected_sound(spu, 1)
    assert spu.selected_sound == 1
    assert spu.pointed_sound is spu.cartridge_sounds[1]
    write_selected_sound(spu, to_signed(-1))
    assert spu.selected_sound == -1
    assert spu.pointed_sound is spu.bios_sound


@pytest.mark.parametrize("index", [2, -2, 3])
def test_selected_sound_out_of_range_ignored(index):
    spu = make_spu()
    write_selected_sound(spu, 1)
    write_selected_sound(spu, index)
    assert spu.selected_sound == 1
    assert spu.pointed_sound is spu.cartridge_sounds[1]


def test_selected_channel():
    spu = make_spu()
    write_selected_channel(spu, 3)
    assert spu.selected_channel == 3
    assert spu.pointed_channel is spu.channels[3]
    write_selected_channel(spu, 4)
    write_selected_channel(spu, -1)
    assert spu.pointed_channel is spu.channels[3]


def test_play_with_loop_is_boolean():
    spu = make_spu()
    write_sound_play_with_loop(spu, 77)
    assert spu.pointed_sound.play_with_loop == 1
    write_sound_play_with_loop(spu, -5)
    assert spu.pointed_sound.play_with_loop == 1
    write_sound_play_with_loop(spu, 0)
    assert spu.pointed_sound.play_with_loop == 0


def test_loop_end_clamped_to_sound_length():
    spu = make_spu()
    write_sound_loop_end(spu, 1000)
    assert spu.pointed_sound.loop_end == SOUND_LENGTH - 1


def test_loop_start_never_after_loop_end():
    spu = make_spu()
    write_sound_loop_end(spu, 5)
    write_sound_loop_start(spu, 7)
    assert spu.pointed_sound.loop_start == 5
    assert spu.pointed_sound.loop_start <= spu.pointed_sound.loop_end


def test_loop_end_never_before_loop_start():
    spu = make_spu()
    write_sound_loop_start(spu, 4)
    write_sound_loop_end(spu, 2)
    assert spu.pointed_sound.loop_end == 4


def test_loop_start_negative_clamped():
    spu = make_spu()
    write_sound_loop_start(spu, 3)
    write_sound_loop_start(spu, -8)
    assert spu.pointed_sound.loop_start == 0


def test_assigned_sound_on_stopped_channel():
    spu = make_spu()
    write_channel_assigned_sound(spu, 1)
    channel = spu.pointed_channel
    assert channel.assigned_sound == 1
    assert channel.current_sound is spu.cartridge_sounds[1]
    write_channel_assigned_sound(spu, -1)
    assert channel.current_sound is spu.bios_sound


def test_assigned_sound_ignored_while_playing():
    spu = make_spu()
    spu.play_channel(spu.pointed_channel)
    write_channel_assigned_sound(spu, 1)
    assert spu.pointed_channel.assigned_sound == -1
    assert spu.pointed_channel.current_sound is spu.bios_sound


def test_assigned_sound_out_of_range_ignored():
    spu = make_spu()
    write_channel_assigned_sound(spu, 2)
    assert spu.pointed_channel.assigned_sound == -1


def test_channel_volume_and_clamp():
    spu = make_spu()
    write_channel_volume(spu, float_to_word(3.5))
    assert spu.pointed_channel.volume == 3.5
    write_channel_volume(spu, float_to_word(100.0))
    assert spu.pointed_channel.volume == 8.0
    write_channel_volume(spu, float_to_word(math.nan))
    assert spu.pointed_channel.volume == 8.0


def test_channel_speed_and_clamp():
    spu = make_spu()
    write_channel_speed(spu, float_to_word(0.5))
    assert spu.pointed_channel.speed == 0.5
    write_channel_speed(spu, float_to_word(1000.0))
    assert spu.pointed_channel.speed == 128.0
    write_channel_speed(spu, float_to_word(-1.0))
    assert spu.pointed_channel.speed < 0.5


def test_channel_loop_enabled_is_boolean():
    spu = make_spu()
    write_channel_loop_enabled(spu, 9)
    assert spu.pointed_channel.loop_enabled == 1
    write_channel_loop_enabled(spu, 0)
    assert spu.pointed_channel.loop_enabled == 0


def test_channel_position_clamped_and_whole():
    spu = make_spu()
    write_channel_position(spu, 3)
    assert spu.pointed_channel.position == 3
    write_channel_position(spu, 500)
    assert spu.pointed_channel.position == SOUND_LENGTH - 1
    write_channel_position(spu, -4)
    assert spu.pointed_channel.position == 0


def test_command_play_pause_stop_selected():
    spu = make_spu()
    channel = spu.pointed_channel
    write_command(spu, SPUCommand.PLAY_SELECTED_CHANNEL)
    assert channel.state == ChannelState.PLAYING
    write_command(spu, SPUCommand.PAUSE_SELECTED_CHANNEL)
    assert channel.state == ChannelState.PAUSED
    write_command(spu, SPUCommand.STOP_SELECTED_CHANNEL)
    assert channel.state == ChannelState.STOPPED


def test_command_all_channels():
    spu = make_spu()
    for channel in spu.channels[:2]:
        spu.play_channel(channel)
    write_command(spu, SPUCommand.PAUSE_ALL_CHANNELS)
    assert [c.state for c in spu.channels[:2]] == [ChannelState.PAUSED] * 2
    assert spu.channels[2].state == ChannelState.STOPPED
    write_command(spu, SPUCommand.RESUME_ALL_CHANNELS)
    assert [c.state for c in spu.channels[:2]] == [ChannelState.PLAYING] * 2
    write_command(spu, SPUCommand.STOP_ALL_CHANNELS)
    assert all(c.state == ChannelState.STOPPED for c in spu.channels)


def test_unknown_command_ignored():
    spu = make_spu()
    spu.play_channel(spu.pointed_channel)
    write_command(spu, 12345)
    assert spu.pointed_channel.state == ChannelState.PLAYING


@pytest.mark.parametrize("port", [SPUPort.SOUND_LENGTH, SPUPort.CHANNEL_STATE])
def test_write_port_read_only(port):
    spu = make_spu()
    with pytest.raises(PortAccessError):
        write_port(spu, port, 1)


@pytest.mark.parametrize("port", [-1, 14, 99])
def test_write_port_out_of_range(port):
    spu = make_spu()
    with pytest.raises(PortAccessError):
        write_port(spu, port, 0)


@pytest.mark.parametrize(
    "port, value",
    [
        (SPUPort.GLOBAL_VOLUME, to_signed(float_to_word(1.25))),
        (SPUPort.SELECTED_SOUND, 1),
        (SPUPort.SELECTED_CHANNEL, 2),
        (SPUPort.SOUND_PLAY_WITH_LOOP, 1),
        (SPUPort.SOUND_LOOP_END, 6),
        (SPUPort.CHANNEL_VOLUME, to_signed(float_to_word(0.75))),
        (SPUPort.CHANNEL_SPEED, to_signed(float_to_word(2.5))),
        (SPUPort.CHANNEL_LOOP_ENABLED, 1),
        (SPUPort.CHANNEL_POSITION, 3),
    ],
)
def test_write_port_round_trips_through_read_port(port, value):
    spu = make_spu()
    write_port(spu, port, value)
    assert spu.read_port(port) == value