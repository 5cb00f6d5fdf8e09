"""Operations the console logic calls on its video output and log."""

from __future__ import annotations

from typing import Optional

from .log import fail
from .log import log_line as _log_line
from .video import BIOS_TEXTURE, GPUColor, GPUQuad, VideoOutput


class ConsoleCallbacks:
    """Routes console requests to a VideoOutput and to the console log."""

    def __init__(self, video: Optional[VideoOutput] = None) -> None:
        self.video = video if video is not None else VideoOutput()

    # -- video -----------------------------------------------------------

    def clear_screen(self, color: GPUColor) -> None:
        self.video.clear_screen(color)

    def draw_quad(self, quad: GPUQuad) -> None:
        self.video.draw_textured_quad(quad)

    def set_multiply_color(self, color: GPUColor) -> None:
        self.video.set_multiply_color(color)

    def set_blending_mode(self, mode: int) -> None:
        """Select a blending mode; invalid values are ignored."""
        self.video.set_blending_mode(mode)

    def select_texture(self, texture_id: int) -> None:
        self.video.select_texture(texture_id)

    def load_texture(self, texture_id: int, pixels: bytes) -> None:
        self.video.load_texture(texture_id, pixels)

    def unload_cartridge_textures(self) -> None:
        """Release every cartridge texture slot."""
        for texture_id in range(len(self.video.cartridge_textures)):
            self.video.unload_texture(texture_id)

    def unload_bios_texture(self) -> None:
        self.video.unload_texture(BIOS_TEXTURE)

    # -- log -------------------------------------------------------------

    def log_line(self, message: str) -> None:
        _log_line(message)

    def throw_exception(self, message: str) -> None:
        """Log the message as an error and raise ConsoleError."""
        fail(message)