"""Sound unit, clock and recording video output of a 32-bit fantasy console."""

__version__ = "0.1.0"
__all__ = ["__version__"]