"""
CHIP-8 VM - Runtime Configuration
=================================

Settings shared by the command-line tools and embedding drivers:
quirks preset, stepping speed and frame buffer rendering.

Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of these)

Speed is in instructions per second. Most CHIP-8 programs were written for
interpreters running somewhere between 500 and 1000 instructions per
second; 700 is the usual default. The 60Hz timers run off wall time and
are not affected by this setting.
"""

from dataclasses import dataclass
from typing import Optional
import os

from chip8_vm.emulator.display import COLOR_SCHEMES
from chip8_vm.emulator.quirks import Quirks, get_quirks

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class EmulatorConfig:
    """
    Configuration for running the CHIP-8 machine.

    Attributes:
        quirks: Quirks preset name (default: "cosmac_vip")
        speed: Instructions per second (default: 700)
        scheme: Frame buffer colour scheme, "dark" or "light"
        scale: Pixel scale factor for PNG rendering (default: 8)
        start_halted: Create the machine paused (default: False)
    """

    quirks: str = "cosmac_vip"
    speed: int = 700
    scheme: str = "dark"
    scale: int = 8
    start_halted: bool = False

    @classmethod
    def from_env(cls) -> "EmulatorConfig":
        """
        Create EmulatorConfig from environment variables.

        Environment variables (all optional):
            CHIP8_QUIRKS: Quirks preset name (e.g. "modern", "vip")
            CHIP8_SPEED: Instructions per second (positive integer)
            CHIP8_SCHEME: Colour scheme ("dark" or "light")
            CHIP8_SCALE: PNG scale factor (positive integer)
            CHIP8_START_HALTED: Start paused ("1", "true", "yes" or "on")

        Returns:
            EmulatorConfig with values from environment variables
        """
        config = cls()

        # Quirks preset
        if quirks := os.environ.get("CHIP8_QUIRKS"):
            try:
                get_quirks(quirks)
                config.quirks = quirks
            except ValueError:
                pass  # Ignore unknown presets

        # Speed override
        if speed := os.environ.get("CHIP8_SPEED"):
            try:
                if int(speed) > 0:
                    config.speed = int(speed)
            except ValueError:
                pass  # Ignore invalid values

        # Colour scheme
        if scheme := os.environ.get("CHIP8_SCHEME"):
            if scheme in COLOR_SCHEMES:
                config.scheme = scheme

        # Render scale
        if scale := os.environ.get("CHIP8_SCALE"):
            try:
                if int(scale) > 0:
                    config.scale = int(scale)
            except ValueError:
                pass  # Ignore invalid values

        # Start paused
        if halted := os.environ.get("CHIP8_START_HALTED"):
            config.start_halted = halted.strip().lower() in _TRUE_VALUES

        return config

    def get_quirks(self) -> Quirks:
        """
        Resolve the configured preset name.

        Raises:
            ValueError: If the preset name is unknown
        """
        return get_quirks(self.quirks)

    @property
    def step_interval(self) -> float:
        """Seconds between instructions, 0.0 when speed is 0 (unthrottled)."""
        return 1.0 / self.speed if self.speed > 0 else 0.0


# ═══════════════════════════════════════════════════════════════════════════════
# GLOBAL DEFAULT CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════

_default_config: Optional[EmulatorConfig] = None


def get_default_config() -> EmulatorConfig:
    """
    Get the default emulator configuration.

    Creates from environment variables on first access.
    Can be overridden by calling set_default_config().

    Returns:
        Default EmulatorConfig instance
    """
    global _default_config
    if _default_config is None:
        _default_config = EmulatorConfig.from_env()
    return _default_config


def set_default_config(config: Optional[EmulatorConfig]) -> None:
    """
    Set the default emulator configuration.

    Args:
        config: Configuration to use as default, or None to re-read the
            environment on next access
    """
    global _default_config
    _default_config = config
