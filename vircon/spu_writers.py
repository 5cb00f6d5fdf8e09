"""Port writers of the sound processing unit."""

from __future__ import annotations

import math
from typing import Callable, Dict

from .spu import ChannelState, SPUCommand, SPUPort, V32SPU
from .timer import PortAccessError
from .word import to_signed, to_unsigned, word_to_float

GLOBAL_VOLUME_MAX = 2.0
CHANNEL_VOLUME_MAX = 8.0
CHANNEL_SPEED_MAX = 128.0


def _clamp(value, low, high):
    if value < low:
        value = low
    if value > high:
        value = high
    return value


def _valid_float(value: int):
    """Return the word as a float, or None if it is NaN or infinite."""
    number = word_to_float(value)
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def write_command(spu: V32SPU, value: int) -> None:
    """Execute an SPU command; unknown command codes are ignored."""
    code = to_signed(value)
    if code == SPUCommand.PLAY_SELECTED_CHANNEL:
        spu.play_channel(spu.pointed_channel)
    elif code == SPUCommand.PAUSE_SELECTED_CHANNEL:
        spu.pause_channel(spu.pointed_channel)
    elif code == SPUCommand.STOP_SELECTED_CHANNEL:
        spu.stop_channel(spu.pointed_channel)
    elif code == SPUCommand.PAUSE_ALL_CHANNELS:
        spu.pause_all_channels()
    elif code == SPUCommand.RESUME_ALL_CHANNELS:
        spu.resume_all_channels()
    elif code == SPUCommand.STOP_ALL_CHANNELS:
        spu.stop_all_channels()


def write_global_volume(spu: V32SPU, value: int) -> None:
    """Set the global volume, clamped; NaN and infinities are ignored."""
    number = _valid_float(value)
    if number is not None:
        spu.global_volume = _clamp(number, 0.0, GLOBAL_VOLUME_MAX)


def write_selected_sound(spu: V32SPU, value: int) -> None:
    """Select a sound (-1 for the BIOS sound); non-existent ones are ignored."""
    index = to_signed(value)
    if index < -1 or index >= spu.loaded_cartridge_sounds:
        return
    spu.selected_sound = index
    spu.pointed_sound = spu.bios_sound if index == -1 else spu.cartridge_sounds[index]


def write_selected_channel(spu: V32SPU, value: int) -> None:
    """Select a channel; non-existent ones are ignored."""
    index = to_signed(value)
    if index < 0 or index >= len(spu.channels):
        return
    spu.selected_channel = index
    spu.pointed_channel = spu.channels[index]


def write_sound_play_with_loop(spu: V32SPU, value: int) -> None:
    spu.pointed_sound.play_with_loop = 1 if to_unsigned(value) != 0 else 0


def write_sound_loop_start(spu: V32SPU, value: int) -> None:
    """Set the loop start, clamped and never past the loop end."""
    sound = spu.pointed_sound
    start = _clamp(to_signed(value), 0, sound.length - 1)
    sound.loop_start = min(start, sound.loop_end)


def write_sound_loop_end(spu: V32SPU, value: int) -> None:
    """Set the loop end, clamped and never before the loop start."""
    sound = spu.pointed_sound
    end = _clamp(to_signed(value), 0, sound.length - 1)
    sound.loop_end = max(end, sound.loop_start)


def write_channel_assigned_sound(spu: V32SPU, value: int) -> None:
    """Assign a sound to the selected channel, only while it is stopped."""
    index = to_signed(value)
    if index < -1 or index >= spu.loaded_cartridge_sounds:
        return
    channel = spu.pointed_channel
    if channel.state != ChannelState.STOPPED:
        return
    channel.assigned_sound = index
    channel.current_sound = spu.bios_sound if index == -1 else spu.cartridge_sounds[index]


def write_channel_volume(spu: V32SPU, value: int) -> None:
    number = _valid_float(value)
    if number is not None:
        spu.pointed_channel.volume = _clamp(number, 0.0, CHANNEL_VOLUME_MAX)


def write_channel_speed(spu: V32SPU, value: int) -> None:
    number = _valid_float(value)
    if number is not None:
        spu.pointed_channel.speed = _clamp(number, 0.0, CHANNEL_SPEED_MAX)


def write_channel_loop_enabled(spu: V32SPU, value: int) -> None:
    spu.pointed_channel.loop_enabled = 1 if to_unsigned(value) != 0 else 0


def write_channel_position(spu: V32SPU, value: int) -> None:
    """Move the selected channel to a whole sample position, clamped."""
    channel = spu.pointed_channel
    length = channel.current_sound.length
    channel.position = float(_clamp(to_signed(value), 0, length - 1))


def _read_only(port: SPUPort) -> Callable[[V32SPU, int], None]:
    def reject(spu: V32SPU, value: int) -> None:
        raise PortAccessError(f"SPU port {port.name} is read-only")

    return reject


_WRITERS: Dict[SPUPort, Callable[[V32SPU, int], None]] = {
    SPUPort.COMMAND: write_command,
    SPUPort.GLOBAL_VOLUME: write_global_volume,
    SPUPort.SELECTED_SOUND: write_selected_sound,
    SPUPort.SELECTED_CHANNEL: write_selected_channel,
    SPUPort.SOUND_LENGTH: _read_only(SPUPort.SOUND_LENGTH),
    SPUPort.SOUND_PLAY_WITH_LOOP: write_sound_play_with_loop,
    SPUPort.SOUND_LOOP_START: write_sound_loop_start,
    SPUPort.SOUND_LOOP_END: write_sound_loop_end,
    SPUPort.CHANNEL_STATE: _read_only(SPUPort.CHANNEL_STATE),
    SPUPort.CHANNEL_ASSIGNED_SOUND: write_channel_assigned_sound,
    SPUPort.CHANNEL_VOLUME: write_channel_volume,
    SPUPort.CHANNEL_SPEED: write_channel_speed,
    SPUPort.CHANNEL_LOOP_ENABLED: write_channel_loop_enabled,
    SPUPort.CHANNEL_POSITION: write_channel_position,
}


def write_port(spu: V32SPU, port: int, value: int) -> None:
    """Write a word to an SPU port, raising PortAccessError if not allowed."""
    try:
        writer = _WRITERS[SPUPort(port)]
    except ValueError:
        raise PortAccessError(f"SPU port {port} does not exist") from None
    writer(spu, value)