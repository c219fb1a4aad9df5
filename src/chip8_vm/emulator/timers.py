"""
Delay and Sound Timers
======================

CHIP-8 has two 8-bit countdown timers, DT (delay) and ST (sound). Both
count down toward zero at 60Hz of wall-clock time, independently of how
fast instructions execute.

There is no background thread: `tick()` is called by the machine once per
step and decrements each timer at most once if a full 1/60s period has
elapsed since the last decrement. A driver stepping slower than 60Hz will
therefore see the timers run slow.
"""

import time
from dataclasses import dataclass
from typing import Callable

TIMER_HZ = 60
TIMER_PERIOD = 1.0 / TIMER_HZ


@dataclass
class TimersState:
    """Timer counters (8-bit each)."""
    delay: int = 0
    sound: int = 0


class Timers:
    """
    The delay and sound timers.

    Example:
        >>> timers = Timers()
        >>> timers.delay = 3
        >>> timers.tick()   # decrements only if 1/60s has passed
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize both timers to zero.

        Args:
            clock: Monotonic time source in seconds. Tests inject a fake.
        """
        self._clock = clock
        self._state = TimersState()
        self._last_tick = clock()

    @property
    def delay(self) -> int:
        """Delay timer DT (8-bit)."""
        return self._state.delay

    @delay.setter
    def delay(self, value: int) -> None:
        self._state.delay = value & 0xFF

    @property
    def sound(self) -> int:
        """Sound timer ST (8-bit). The buzzer sounds while nonzero."""
        return self._state.sound

    @sound.setter
    def sound(self, value: int) -> None:
        self._state.sound = value & 0xFF

    @property
    def is_sounding(self) -> bool:
        return self._state.sound > 0

    def tick(self) -> bool:
        """
        Decrement both timers if a 1/60s period has elapsed.

        Nonzero timers drop by exactly one; zero timers stay at zero. The
        reference point is reset to now, so repeated calls inside the same
        period do nothing.

        Returns:
            True if a period had elapsed
        """
        now = self._clock()
        if now - self._last_tick < TIMER_PERIOD:
            return False

        if self._state.delay > 0:
            self._state.delay -= 1
        if self._state.sound > 0:
            self._state.sound -= 1

        self._last_tick = now
        return True

    def __repr__(self) -> str:
        return f"Timers(delay=${self.delay:02X}, sound=${self.sound:02X})"
