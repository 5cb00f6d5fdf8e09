# vircon

Pure-Python building blocks of a 32-bit fantasy console: the sound
processing unit (SPU), the real-time clock, and a video output that keeps
render state and records the quads drawn to it instead of rasterizing
them. The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run `pytest`:

```
pip install ".[test]"
pytest
```

## Modules

- `vircon.log`: `log_line(message)` writes an informational line and
  `fail(message)` writes an error line and raises `ConsoleError`.
  By default lines go to stdout (errors to stderr, prefixed with
  `ERROR: `). `set_log_callback(callback)` installs a host callback that
  receives a `logging` level (`logging.INFO` or `logging.ERROR`) and the
  message followed by a newline; it returns the previous callback, and
  `None` restores terminal output.
- `vircon.word`: views of a 32-bit word: `to_signed`, `to_unsigned`,
  `word_to_float` and `float_to_word` (IEEE single precision).
- `vircon.timer`: `V32Timer(now=None)` keeps the date as
  `(year << 16) | day_of_year` (days counted from 0) and the time as
  seconds within the day, taken from `now` or the current local time.
  `run_next_cycle()` counts cycles; `change_frame()` resets the cycle
  counter, counts the frame, advances the time every 60 frames and rolls
  the date and year over. `read_port(port)` reads the ports named by
  `ClockPort`; `write_port` always raises `PortAccessError`, as every
  timer port is read-only.
- `vircon.spu`: `V32SPU(channels=16, max_cartridge_sounds=1024,
  samples_per_frame=735)` holds a BIOS sound, the cartridge sounds and
  the channels (`Sound`, `Channel`, `Sample`). It plays, pauses and stops
  channels, and `change_frame()` mixes all playing channels, with loops
  and playback speed, into `output_buffer` (an `OutputBuffer` whose
  `sequence_number` grows by one each frame). Mixed samples are clamped to
  the 16-bit signed range. `read_port(port)` reads the ports named by
  `SPUPort`; the command port is write-only. Command codes are in
  `SPUCommand`, channel states in `ChannelState`.
- `vircon.spu_writers`: one writer per writable SPU port, and
  `write_port(spu, port, value)`, which dispatches to them. Out-of-range
  values are clamped, NaN or infinite floats and non-existent sounds or
  channels are ignored, and writes to read-only or non-existent ports
  raise `PortAccessError`.
- `vircon.gl`: `GLError` codes, `gl_error_string(code)` and
  `log_gl_result(entry_text, code)`, which logs the result and calls
  `fail` for any code other than `NO_ERROR`.
- `vircon.video`: `VideoOutput(max_cartridge_textures=256,
  screen_width=640, screen_height=360)` with `GPUColor`, `GPUQuad`,
  `BlendingMode` and `screen_quad`. It keeps the multiply colour, blending
  mode and bound texture, stores textures (1024×1024 RGBA pixel data,
  readable through `texture_pixels`), and appends a `DrawCommand` to
  `commands` for each quad drawn. `begin_frame()` sets the viewport and
  clears the recorded commands; `clear_screen(color)` draws a full-screen
  quad with a white texture.
- `vircon.callbacks`: `ConsoleCallbacks(video=None)` routes the
  console's drawing, texture and log requests to a `VideoOutput` and to
  `vircon.log`.

## Example

```python
from vircon.spu import V32SPU, Sample, SPUPort, SPUCommand
from vircon.spu_writers import write_port

spu = V32SPU(channels=16, max_cartridge_sounds=1024, samples_per_frame=735)
spu.load_sound(spu.bios_sound, [Sample(1000, -1000)] * 2000)
spu.reset()

write_port(spu, SPUPort.COMMAND, SPUCommand.PLAY_SELECTED_CHANNEL)
spu.change_frame()
print(spu.output_buffer.samples[0])  # Sample(left=500, right=-500)
```

## What this package does not do

It is not a complete console. There is no CPU, memory, cartridge or
memory-card loading, and no gamepad input. `VideoOutput` only records
draw commands: it opens no window and renders no pixels. The SPU fills
an output buffer but plays nothing through an audio device. There is no
command to run.