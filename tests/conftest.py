"""
Shared Test Fixtures
====================

Fixtures used across the CHIP-8 VM tests:
- clock: a manually advanced time source for the 60Hz timers
- make_machine: builds a Machine from a list of 16-bit instruction words
"""

from typing import Iterable, Optional

import pytest

from chip8_vm.emulator import Machine, Quirks, QUIRKS_COSMAC_VIP, Timers


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def words_to_bytes(words: Iterable[int]) -> bytes:
    """Pack 16-bit instruction words big-endian."""
    data = bytearray()
    for word in words:
        data.append((word >> 8) & 0xFF)
        data.append(word & 0xFF)
    return bytes(data)


class FixedRandom:
    """Random source that always returns the same bits."""

    def __init__(self, value: int):
        self.value = value

    def getrandbits(self, k: int) -> int:
        return self.value & ((1 << k) - 1)


@pytest.fixture
def clock():
    """Fake clock starting at t=0."""
    return FakeClock()


@pytest.fixture
def make_machine(clock):
    """
    Factory for machines with a fake clock.

    Usage:
        m = make_machine([0x6001, 0x1202])
        m = make_machine([0x8126], quirks=QUIRKS_MODERN)
    """
    def _make(
        words: Iterable[int] = (),
        quirks: Quirks = QUIRKS_COSMAC_VIP,
        rng: Optional[FixedRandom] = None,
    ) -> Machine:
        return Machine(
            words_to_bytes(words),
            quirks,
            rng=rng,
            timers=Timers(clock=clock),
        )

    return _make


@pytest.fixture
def fixed_random():
    """Factory for FixedRandom sources."""
    return FixedRandom
