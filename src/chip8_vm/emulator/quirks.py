"""
CHIP-8 Compatibility Quirks
===========================

Historical CHIP-8 interpreters disagree on the semantics of a few opcodes.
Each disagreement is modelled as a boolean flag, and a `Quirks` value is
passed to the Machine at construction time. It is read-only afterwards.

Flags:
- vf_reset: OR/AND/XOR (8xy1-8xy3) zero VF as a side effect
- memory: Fx55/Fx65 advance I by x+1 after the block copy
- shifting: 8xy6/8xyE shift Vx in place, ignoring Vy

Presets:
- COSMAC_VIP: the original 1977 RCA COSMAC VIP interpreter
- MODERN: CHIP-48 / SUPER-CHIP derived interpreters most ROMs since the
  1990s were written against

The presets follow the documented behaviour of those interpreters (see
https://chip8.gulrak.net/). They replace an earlier "old"/"new" pair in
which "old" was vf_reset only and "new" was vf_reset + memory; neither of
those enabled shifting, so ROMs relying on in-place shifts need MODERN.

Presets are ordinary values, so several machines with different quirks can
coexist in one process.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Quirks:
    """
    Selection of opcode semantics.

    Attributes:
        vf_reset: Logical ops (OR/AND/XOR) zero VF
        memory: Register block load/store advance I
        shifting: Shifts read the shifted register itself instead of Vy
    """
    vf_reset: bool = False
    memory: bool = False
    shifting: bool = False

    def describe(self) -> str:
        """One-line summary of the enabled flags."""
        enabled = [
            name for name in ("vf_reset", "memory", "shifting")
            if getattr(self, name)
        ]
        return ", ".join(enabled) if enabled else "none"


# =============================================================================
# PREDEFINED PRESETS
# =============================================================================

QUIRKS_COSMAC_VIP = Quirks(
    vf_reset=True,
    memory=True,
    shifting=False,
)

QUIRKS_MODERN = Quirks(
    vf_reset=False,
    memory=False,
    shifting=True,
)

QUIRKS_DEFAULT = QUIRKS_COSMAC_VIP

_QUIRKS_MAP = {
    "COSMAC_VIP": QUIRKS_COSMAC_VIP,
    "MODERN": QUIRKS_MODERN,
}


def get_quirks(name: str) -> Quirks:
    """
    Get a quirks preset by name.

    Args:
        name: Preset name, case-insensitive ("cosmac_vip", "vip", "modern",
              "schip")

    Returns:
        The Quirks preset

    Raises:
        ValueError: If name is not a known preset
    """
    key = name.upper().strip().replace("-", "_")

    if key in _QUIRKS_MAP:
        return _QUIRKS_MAP[key]

    # Common aliases
    if key in ("VIP", "COSMAC", "CHIP8", "CHIP_8"):
        return QUIRKS_COSMAC_VIP
    if key in ("SCHIP", "SUPERCHIP", "CHIP48", "CHIP_48"):
        return QUIRKS_MODERN
    if key in ("DEFAULT", ""):
        return QUIRKS_DEFAULT

    available = ", ".join(sorted(n.lower() for n in _QUIRKS_MAP))
    raise ValueError(f"Unknown quirks preset '{name}'. Available: {available}")


def list_quirks() -> dict[str, Quirks]:
    """Return all named presets, keyed by lower-case name."""
    return {name.lower(): quirks for name, quirks in _QUIRKS_MAP.items()}
