"""Video output: colour state, blending, textures and recorded draw commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from .log import fail, log_line

TEXTURE_SIZE = 1024
BIOS_TEXTURE = -1

Point = Tuple[float, float]


class BlendingMode(IntEnum):
    """Ways a drawn quad is combined with what is already on screen."""

    ALPHA = 0x20
    ADD = 0x21
    SUBTRACT = 0x22


@dataclass(frozen=True)
class GPUColor:
    """An RGBA colour with 8-bit components."""

    r: int = 255
    g: int = 255
    b: int = 255
    a: int = 255

    def __post_init__(self) -> None:
        for component in (self.r, self.g, self.b, self.a):
            if not 0 <= component <= 255:
                raise ValueError(f"colour component {component} is out of range")

    def normalized(self) -> Tuple[float, float, float, float]:
        """Return the components scaled to the range 0.0 to 1.0."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a / 255.0)


@dataclass(frozen=True)
class GPUQuad:
    """A quad given by 4 vertex positions and 4 texture coordinates."""

    positions: Tuple[Point, Point, Point, Point]
    tex_coords: Tuple[Point, Point, Point, Point]

    def __post_init__(self) -> None:
        if len(self.positions) != 4 or len(self.tex_coords) != 4:
            raise ValueError("a quad needs exactly 4 positions and 4 texture coordinates")
        object.__setattr__(self, "positions", tuple(tuple(p) for p in self.positions))
        object.__setattr__(self, "tex_coords", tuple(tuple(t) for t in self.tex_coords))


@dataclass(frozen=True)
class DrawCommand:
    """One textured quad as it was submitted for drawing."""

    quad: GPUQuad
    color: GPUColor
    texture: int
    blending_mode: BlendingMode


def screen_quad(width: float, height: float) -> GPUQuad:
    """Return a quad covering the whole screen, sampling a single texel."""
    return GPUQuad(
        positions=((0, 0), (width, 0), (0, height), (width, height)),
        tex_coords=((0.5, 0.5),) * 4,
    )


class VideoOutput:
    """Keeps the console's render state and records the quads it draws."""

    def __init__(
        self,
        max_cartridge_textures: int = 256,
        screen_width: int = 640,
        screen_height: int = 360,
    ) -> None:
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.multiply_color = GPUColor()
        self.blending_mode = BlendingMode.ALPHA
        self.bios_texture = 0
        self.cartridge_textures: List[int] = [0] * max_cartridge_textures
        self.bound_texture = 0
        self.viewport: Optional[Tuple[int, int, int, int]] = None
        self.commands: List[DrawCommand] = []
        self._pixels: Dict[int, bytes] = {}
        self._next_handle = 1
        self.white_texture = self._create_white_texture()

    # -- texture bookkeeping ---------------------------------------------

    def _new_handle(self) -> int:
        handle = self._next_handle
        self._next_handle += 1
        return handle

    def _create_white_texture(self) -> int:
        log_line("Creating white texture")
        handle = self._new_handle()
        self._pixels[handle] = bytes((255, 255, 255, 255))
        log_line("Finished creating white texture")
        return handle

    def _slot(self, texture_id: int) -> int:
        if texture_id < 0:
            return self.bios_texture
        if texture_id >= len(self.cartridge_textures):
            raise IndexError(f"texture {texture_id} does not exist")
        return self.cartridge_textures[texture_id]

    def _set_slot(self, texture_id: int, handle: int) -> None:
        if texture_id < 0:
            self.bios_texture = handle
        elif texture_id >= len(self.cartridge_textures):
            raise IndexError(f"texture {texture_id} does not exist")
        else:
            self.cartridge_textures[texture_id] = handle

    def texture_pixels(self, texture_id: int) -> Optional[bytes]:
        """Return the pixel data of a loaded texture, or None if not loaded."""
        return self._pixels.get(self._slot(texture_id))

    # -- frame handling --------------------------------------------------

    def begin_frame(self) -> None:
        """Start a new frame: target the full screen and re-apply blending."""
        self.viewport = (0, 0, self.screen_width, self.screen_height)
        self.commands = []
        self.set_blending_mode(self.blending_mode)

    # -- colour control --------------------------------------------------

    def set_multiply_color(self, color: GPUColor) -> None:
        self.multiply_color = color

    def set_blending_mode(self, mode: int) -> None:
        """Select a blending mode; invalid values are ignored."""
        try:
            self.blending_mode = BlendingMode(mode)
        except ValueError:
            return

    # -- rendering -------------------------------------------------------

    def draw_textured_quad(self, quad: GPUQuad) -> None:
        """Draw a quad with the bound texture, multiply colour and blending."""
        self.commands.append(
            DrawCommand(quad, self.multiply_color, self.bound_texture, self.blending_mode)
        )

    def clear_screen(self, color: GPUColor) -> None:
        """Fill the screen with a solid colour, keeping the multiply colour."""
        previous = self.multiply_color
        self.multiply_color = color
        self.bound_texture = self.white_texture
        self.draw_textured_quad(screen_quad(self.screen_width, self.screen_height))
        self.multiply_color = previous

    # -- textures --------------------------------------------------------

    def load_texture(self, texture_id: int, pixels: bytes) -> None:
        """Create a texture from RGBA pixel data and bind it."""
        old_handle = self._slot(texture_id)
        data = bytes(pixels)
        if len(data) != TEXTURE_SIZE * TEXTURE_SIZE * 4:
            fail("Could not create an OpenGL texture from pixel data")
        handle = self._new_handle()
        self._pixels.pop(old_handle, None)
        self._pixels[handle] = data
        self._set_slot(texture_id, handle)
        self.bound_texture = handle

    def unload_texture(self, texture_id: int) -> None:
        """Release a texture; its slot then refers to no texture."""
        handle = self._slot(texture_id)
        self._pixels.pop(handle, None)
        self._set_slot(texture_id, 0)

    def select_texture(self, texture_id: int) -> None:
        self.bound_texture = self._slot(texture_id)

    def destroy(self) -> None:
        """Release every texture, including the white one."""
        self.unload_texture(BIOS_TEXTURE)
        self._pixels.pop(self.white_texture, None)
        self.white_texture = 0
        for index, handle in enumerate(self.cartridge_textures):
            if handle != 0:
                self.unload_texture(index)