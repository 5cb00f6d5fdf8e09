"""The console's sound processing unit: sounds, channels and mixing."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional

from .timer import PortAccessError
from .word import float_to_word, to_signed

_SAMPLE_MIN = -32768
_SAMPLE_MAX = 32767


class SPUPort(IntEnum):
    """Local port numbers of the SPU."""

    COMMAND = 0
    GLOBAL_VOLUME = 1
    SELECTED_SOUND = 2
    SELECTED_CHANNEL = 3
    SOUND_LENGTH = 4
    SOUND_PLAY_WITH_LOOP = 5
    SOUND_LOOP_START = 6
    SOUND_LOOP_END = 7
    CHANNEL_STATE = 8
    CHANNEL_ASSIGNED_SOUND = 9
    CHANNEL_VOLUME = 10
    CHANNEL_SPEED = 11
    CHANNEL_LOOP_ENABLED = 12
    CHANNEL_POSITION = 13


class SPUCommand(IntEnum):
    """Values accepted by the SPU command port."""

    PLAY_SELECTED_CHANNEL = 0x30
    PAUSE_SELECTED_CHANNEL = 0x31
    STOP_SELECTED_CHANNEL = 0x32
    PAUSE_ALL_CHANNELS = 0x33
    RESUME_ALL_CHANNELS = 0x34
    STOP_ALL_CHANNELS = 0x35


class ChannelState(IntEnum):
    """Playback state of a sound channel."""

    STOPPED = 0x40
    PAUSED = 0x41
    PLAYING = 0x42


@dataclass(frozen=True)
class Sample:
    """One stereo sample of 16-bit signed values."""

    left: int = 0
    right: int = 0


@dataclass(eq=False)
class Sound:
    """A sound loaded into the SPU, with its loop configuration."""

    length: int = 0
    play_with_loop: int = 0
    loop_start: int = 0
    loop_end: int = -1
    samples: List[Sample] = field(default_factory=list)


@dataclass(eq=False)
class Channel:
    """A sound channel that plays one sound at a time."""

    current_sound: Sound
    state: ChannelState = ChannelState.STOPPED
    assigned_sound: int = -1
    volume: float = 0.5
    speed: float = 1.0
    loop_enabled: int = 0
    position: float = 0.0


@dataclass(eq=False)
class OutputBuffer:
    """Samples produced for one frame, tagged with a sequence number."""

    samples: List[Sample]
    sequence_number: int = 0


def _clamp_sample(value: float) -> int:
    return max(_SAMPLE_MIN, min(_SAMPLE_MAX, int(value)))


class V32SPU:
    """Mixes the console's sound channels into a per-frame output buffer."""

    def __init__(
        self,
        channels: int = 16,
        max_cartridge_sounds: int = 1024,
        samples_per_frame: int = 735,
    ) -> None:
        self.samples_per_frame = samples_per_frame
        self.bios_sound = Sound()
        self.cartridge_sounds = [Sound() for _ in range(max_cartridge_sounds)]
        self.loaded_cartridge_sounds = 0

        self.command = 0
        self.global_volume = 1.0
        self.selected_sound = -1
        self.selected_channel = 0

        self.channels = [Channel(current_sound=self.bios_sound) for _ in range(channels)]
        self.pointed_sound: Optional[Sound] = None
        self.pointed_channel: Optional[Channel] = None
        self.output_buffer = OutputBuffer([Sample()] * samples_per_frame)
        self.reset()

    # -- audio resources -------------------------------------------------

    def load_sound(self, sound: Sound, samples: Iterable[Sample]) -> None:
        """Fill sound with samples and give it its initial loop settings."""
        sound.samples = list(samples)
        sound.length = len(sound.samples)
        sound.play_with_loop = 0
        sound.loop_start = 0
        sound.loop_end = sound.length - 1

    def unload_sound(self, sound: Sound) -> None:
        sound.samples = []
        sound.length = 0

    # -- I/O bus ---------------------------------------------------------

    def read_port(self, port: int) -> int:
        """Return the word held by an SPU port, as a signed integer."""
        if port < 0 or port > SPUPort.CHANNEL_POSITION:
            raise PortAccessError(f"SPU port {port} does not exist")
        if port == SPUPort.COMMAND:
            raise PortAccessError("SPU command port is write-only")

        sound = self.pointed_sound
        channel = self.pointed_channel
        if port == SPUPort.GLOBAL_VOLUME:
            return to_signed(float_to_word(self.global_volume))
        if port == SPUPort.SELECTED_SOUND:
            return to_signed(self.selected_sound)
        if port == SPUPort.SELECTED_CHANNEL:
            return to_signed(self.selected_channel)
        if port == SPUPort.SOUND_LENGTH:
            return to_signed(sound.length)
        if port == SPUPort.SOUND_PLAY_WITH_LOOP:
            return to_signed(sound.play_with_loop)
        if port == SPUPort.SOUND_LOOP_START:
            return to_signed(sound.loop_start)
        if port == SPUPort.SOUND_LOOP_END:
            return to_signed(sound.loop_end)
        if port == SPUPort.CHANNEL_STATE:
            return int(channel.state)
        if port == SPUPort.CHANNEL_ASSIGNED_SOUND:
            return to_signed(channel.assigned_sound)
        if port == SPUPort.CHANNEL_VOLUME:
            return to_signed(float_to_word(channel.volume))
        if port == SPUPort.CHANNEL_SPEED:
            return to_signed(float_to_word(channel.speed))
        if port == SPUPort.CHANNEL_LOOP_ENABLED:
            return to_signed(channel.loop_enabled)
        # position is kept with a fractional part; only its integer part is visible
        return to_signed(int(channel.position))

    # -- general operation -----------------------------------------------

    def change_frame(self) -> None:
        """Generate the sound for the next frame."""
        self.update_output_buffer()

    def reset(self) -> None:
        """Return registers, channels, buffer and loop settings to power-on state."""
        self.global_volume = 1.0
        self.selected_sound = -1
        self.selected_channel = 0

        self.pointed_sound = self.bios_sound
        self.pointed_channel = self.channels[0] if self.channels else None

        for channel in self.channels:
            channel.state = ChannelState.STOPPED
            channel.assigned_sound = -1
            channel.volume = 0.5
            channel.speed = 1.0
            channel.loop_enabled = 0
            channel.position = 0.0
            channel.current_sound = self.bios_sound

        self.output_buffer.samples = [Sample()] * self.samples_per_frame
        self.output_buffer.sequence_number = 0

        for sound in (self.bios_sound, *self.cartridge_sounds):
            sound.play_with_loop = 0
            sound.loop_start = 0
            sound.loop_end = sound.length - 1

    # -- channel commands ------------------------------------------------

    def play_channel(self, channel: Channel) -> None:
        """Start, retrigger or resume a channel."""
        if channel.state in (ChannelState.STOPPED, ChannelState.PLAYING):
            channel.position = 0.0
            channel.loop_enabled = channel.current_sound.play_with_loop
        channel.state = ChannelState.PLAYING

    def pause_channel(self, channel: Channel) -> None:
        channel.state = ChannelState.PAUSED

    def stop_channel(self, channel: Channel) -> None:
        """Stop a channel and rewind it, keeping its sound and settings."""
        channel.state = ChannelState.STOPPED
        channel.position = 0.0

    def pause_all_channels(self) -> None:
        for channel in self.channels:
            if channel.state == ChannelState.PLAYING:
                self.pause_channel(channel)

    def resume_all_channels(self) -> None:
        for channel in self.channels:
            if channel.state == ChannelState.PAUSED:
                self.play_channel(channel)

    def stop_all_channels(self) -> None:
        for channel in self.channels:
            if channel.state != ChannelState.STOPPED:
                self.stop_channel(channel)

    # -- output ----------------------------------------------------------

    def _advance(self, channel: Channel) -> Sample:
        sound = channel.current_sound
        index = int(channel.position)
        picked = sound.samples[index] if 0 <= index < len(sound.samples) else Sample()

        previous = channel.position
        channel.position += channel.speed

        if channel.loop_enabled:
            start, end = sound.loop_start, sound.loop_end
            # a bad loop configuration cannot loop at all
            if end > start and previous <= end < channel.position:
                # compensate any overshoot caused by high playback speeds
                channel.position = start + math.fmod(channel.position - start, end - start)

        if channel.position > sound.length - 1:
            self.stop_channel(channel)
        return picked

    def update_output_buffer(self) -> None:
        """Mix all playing channels into a new frame of output samples."""
        self.output_buffer.sequence_number += 1
        samples = []
        for _ in range(self.samples_per_frame):
            left = right = 0
            for channel in self.channels:
                if channel.state != ChannelState.PLAYING:
                    continue
                total_volume = self.global_volume * channel.volume
                picked = self._advance(channel)
                left = _clamp_sample(left + total_volume * picked.left)
                right = _clamp_sample(right + total_volume * picked.right)
            samples.append(Sample(left, right))
        self.output_buffer.samples = samples