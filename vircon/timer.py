"""The console's clock: date, time of day and frame/cycle counters."""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import Optional

from .log import ConsoleError
from .word import to_signed

FRAMES_PER_SECOND = 60
SECONDS_PER_DAY = 86400


class ClockPort(IntEnum):
    """Local port numbers of the timer."""

    CURRENT_DATE = 0
    CURRENT_TIME = 1
    FRAME_COUNTER = 2
    CYCLE_COUNTER = 3


class PortAccessError(ConsoleError):
    """Raised when a port cannot be read or written."""


class V32Timer:
    """Keeps the console's date, time and counters."""

    def __init__(self, now: Optional[datetime] = None) -> None:
        moment = now if now is not None else datetime.now()
        info = moment.timetuple()
        # date is stored as (year << 16) | day-of-year, days counted from 0
        self.current_date = (info.tm_year << 16) | (info.tm_yday - 1)
        self.current_time = info.tm_hour * 3600 + info.tm_min * 60 + info.tm_sec
        self.frame_counter = 0
        self.cycle_counter = 0

    def read_port(self, port: int) -> int:
        """Return the value of a timer port."""
        if port > ClockPort.CYCLE_COUNTER:
            raise PortAccessError(f"timer port {port} does not exist")
        if port == ClockPort.FRAME_COUNTER:
            value = self.frame_counter
        elif port == ClockPort.CYCLE_COUNTER:
            value = self.cycle_counter
        elif port == ClockPort.CURRENT_TIME:
            value = self.current_time
        else:
            value = self.current_date
        return to_signed(value)

    def write_port(self, port: int, value: int) -> None:
        """Reject the write: every timer port is read-only."""
        raise PortAccessError(f"timer port {port} is read-only")

    def run_next_cycle(self) -> None:
        self.cycle_counter += 1

    def change_frame(self) -> None:
        """Advance to the next frame, updating time and date as needed."""
        self.cycle_counter = 0
        self.frame_counter += 1

        if self.frame_counter % FRAMES_PER_SECOND == 0:
            self.current_time += 1

        if self.current_time >= SECONDS_PER_DAY:
            self.current_time = 0
            self.current_date += 1

            year = self.current_date >> 16
            is_leap_year = year % 4 == 0 and year % 100 != 0
            days_this_year = 366 if is_leap_year else 365
            if (self.current_date & 0xFFFF) >= days_this_year:
                self.current_date = (year + 1) << 16

    def reset(self) -> None:
        self.cycle_counter = 0
        self.frame_counter = 0