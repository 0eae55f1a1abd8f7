"""Providers of the raw hardware model identifier."""

import logging
import platform
import re
import subprocess
import sys
from dataclasses import dataclass
from functools import cached_property, lru_cache
from typing import Protocol

from config.settings import get_settings

logger = logging.getLogger(__name__)

SYSCTL_MODEL_COMMAND = ("sysctl", "-n", "hw.model")
SYSCTL_TIMEOUT_SECONDS = 5

_SURROUNDING_CONTROL_CHARACTERS = re.compile(r"^[\x00-\x1f\x7f]+|[\x00-\x1f\x7f]+$")


class HardwareIdentifierProvider(Protocol):
    """Protocol for anything that can report the raw hardware model identifier."""

    def get_identifier(self) -> str | None: ...


@dataclass(frozen=True)
class StaticHardwareIdentifierProvider:
    """Reports a fixed identifier, e.g. one supplied through configuration."""

    identifier: str | None

    def get_identifier(self) -> str | None:
        return self.identifier


def _clean_identifier(raw: str) -> str | None:
    identifier = _SURROUNDING_CONTROL_CHARACTERS.sub("", raw)
    return identifier or None


class SystemHardwareIdentifierProvider:
    """
    Reads the identifier of the machine this process runs on.

    On macOS this is the model identifier from ``sysctl hw.model`` (e.g.
    ``"MacBookPro16,1"``). Elsewhere it's the kernel's machine name, which is
    the model identifier on iOS devices and the CPU architecture on
    simulators and most other hosts. The value is read once per provider.
    """

    def __init__(self, platform_name: str | None = None):
        self.platform_name = platform_name or sys.platform

    @cached_property
    def _identifier(self) -> str | None:
        if self.platform_name == "darwin":
            return self._read_sysctl_model()
        return _clean_identifier(platform.machine())

    def _read_sysctl_model(self) -> str | None:
        try:
            result = subprocess.run(
                SYSCTL_MODEL_COMMAND,
                capture_output=True,
                text=True,
                check=True,
                timeout=SYSCTL_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"Failed to read hardware model from sysctl: {e}")
            return None

        identifier = _clean_identifier(result.stdout)
        if identifier is None:
            logger.warning("sysctl returned an empty hardware model")
        return identifier

    def get_identifier(self) -> str | None:
        return self._identifier


@lru_cache(maxsize=1)
def get_hardware_identifier_provider() -> HardwareIdentifierProvider:
    """
    Returns the configured hardware identifier provider.

    ``HARDWARE_MODEL_IDENTIFIER`` overrides what the system reports.
    """
    override = get_settings().hardware_model_identifier
    if override is not None:
        logger.info(f"Using configured hardware model identifier: {override}")
        return StaticHardwareIdentifierProvider(override)

    return SystemHardwareIdentifierProvider()
