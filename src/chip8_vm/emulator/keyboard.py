"""
Hex Keypad for the CHIP-8 VM
============================

The COSMAC VIP keypad has sixteen keys labelled 0-F, laid out as:

    1  2  3  C
    4  5  6  D
    7  8  9  E
    A  0  B  F

Conventionally these are mapped onto the left block of a host keyboard:

    1  2  3  4
    Q  W  E  R
    A  S  D  F
    Z  X  C  V

The Keyboard holds one up/down flag per logical key. Only the input
collaborator (a UI or test) changes the flags; the machine reads them for
SKP/SKNP. The blocking LD Vx, K instruction does NOT read these levels: it
waits for a separate press event passed to `Machine.step`, so a key that is
already held is not consumed twice.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Union


class Key(IntEnum):
    """Logical key identifier; the value is the key's hex digit."""
    K0 = 0x0
    K1 = 0x1
    K2 = 0x2
    K3 = 0x3
    K4 = 0x4
    K5 = 0x5
    K6 = 0x6
    K7 = 0x7
    K8 = 0x8
    K9 = 0x9
    KA = 0xA
    KB = 0xB
    KC = 0xC
    KD = 0xD
    KE = 0xE
    KF = 0xF

    @classmethod
    def from_value(cls, value: int) -> Optional["Key"]:
        """Return the key for a register value, or None if value > 0xF."""
        if 0 <= value <= 0xF:
            return cls(value)
        return None

    @property
    def label(self) -> str:
        """Keypad label ("0"-"F")."""
        return f"{int(self):X}"


KEY_COUNT = len(Key)

# =============================================================================
# KEYPAD LAYOUT TABLES
# =============================================================================

# Physical keypad rows, top to bottom
KEYPAD_LAYOUT: List[List[Key]] = [
    [Key.K1, Key.K2, Key.K3, Key.KC],
    [Key.K4, Key.K5, Key.K6, Key.KD],
    [Key.K7, Key.K8, Key.K9, Key.KE],
    [Key.KA, Key.K0, Key.KB, Key.KF],
]

# Host key name -> logical key (same grid positions as KEYPAD_LAYOUT)
HOST_KEY_MAP: Dict[str, Key] = {
    "1": Key.K1, "2": Key.K2, "3": Key.K3, "4": Key.KC,
    "Q": Key.K4, "W": Key.K5, "E": Key.K6, "R": Key.KD,
    "A": Key.K7, "S": Key.K8, "D": Key.K9, "F": Key.KE,
    "Z": Key.KA, "X": Key.K0, "C": Key.KB, "V": Key.KF,
}

KeyLike = Union[Key, int, str]


def resolve_key(key: KeyLike) -> Key:
    """
    Convert a key reference to a Key.

    Accepts a Key, an int 0-15, or a string: a keypad label ("0"-"F",
    "0x0"-"0xF") or a Key name ("KA").

    Raises:
        ValueError: If the reference does not name one of the 16 keys
    """
    if isinstance(key, Key):
        return key
    if isinstance(key, int):
        resolved = Key.from_value(key)
        if resolved is None:
            raise ValueError(f"Key value must be 0-15, got {key}")
        return resolved

    name = key.upper().strip()
    if name in Key.__members__:
        return Key[name]
    if name.startswith("0X"):
        name = name[2:]
    if len(name) == 1:
        try:
            return Key(int(name, 16))
        except ValueError:
            pass
    raise ValueError(f"Unknown key '{key}'")


@dataclass
class KeyboardState:
    """Key-down flags, indexed by key value."""
    states: List[bool] = field(default_factory=lambda: [False] * KEY_COUNT)


class Keyboard:
    """
    Sixteen key-down flags addressed by logical key.

    Example:
        >>> kb = Keyboard()
        >>> kb.key_down("A")
        >>> kb.is_pressed(Key.KA)
        True
        >>> kb[Key.KA] = False
    """

    def __init__(self):
        self._state = KeyboardState()

    def key_down(self, key: KeyLike) -> None:
        """Mark a key as held down."""
        self._state.states[resolve_key(key)] = True

    def key_up(self, key: KeyLike) -> None:
        """Mark a key as released."""
        self._state.states[resolve_key(key)] = False

    def is_pressed(self, key: KeyLike) -> bool:
        """Check whether a key is currently down."""
        return self._state.states[resolve_key(key)]

    def clear(self) -> None:
        """Release all keys."""
        self._state.states = [False] * KEY_COUNT

    def pressed_keys(self) -> List[Key]:
        """All keys currently down, in key order."""
        return [Key(i) for i, down in enumerate(self._state.states) if down]

    def __getitem__(self, key: KeyLike) -> bool:
        return self.is_pressed(key)

    def __setitem__(self, key: KeyLike, down: bool) -> None:
        self._state.states[resolve_key(key)] = bool(down)

    def render(self) -> str:
        """Keypad grid with '*' after each held key."""
        lines = []
        for row in KEYPAD_LAYOUT:
            cells = [f"{k.label}{'*' if self.is_pressed(k) else ' '}" for k in row]
            lines.append(" ".join(cells))
        return "\n".join(lines)

    def __repr__(self) -> str:
        held = "".join(k.label for k in self.pressed_keys())
        return f"Keyboard(pressed='{held}')"
