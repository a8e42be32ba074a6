"""Platform flags for configurations and layer parameters"""

import sys
from enum import Enum
from typing import Iterable

from ..logging_config import get_logger

logger = get_logger("platform")


class PlatformType(Enum):
    """Platforms a configuration can apply to, valued by flag bit index"""
    WINDOWS = 0
    LINUX = 1
    MACOS = 2

    @property
    def bit(self) -> int:
        return 1 << self.value


PLATFORM_ALL_BIT = sum(platform.bit for platform in PlatformType)


def current_platform() -> PlatformType:
    """Get the platform this process runs on."""
    if sys.platform == "win32":
        return PlatformType.WINDOWS
    if sys.platform == "darwin":
        return PlatformType.MACOS
    return PlatformType.LINUX


def get_platform_flags(tokens: Iterable[str]) -> int:
    """Convert platform tokens (e.g. "WINDOWS") to a flag set.

    Args:
        tokens: Platform tokens as written in configuration files

    Returns:
        Bitwise OR of the matching platform bits; unknown tokens are skipped
    """
    flags = 0
    for token in tokens:
        try:
            flags |= PlatformType[str(token).upper()].bit
        except KeyError:
            logger.warning(f"Ignoring unknown platform token: {token}")
    return flags


def get_platform_tokens(flags: int) -> list[str]:
    """Convert a flag set to platform tokens, in declaration order."""
    return [platform.name for platform in PlatformType if flags & platform.bit]


def is_platform_enabled(flags: int, platform: PlatformType) -> bool:
    return bool(flags & platform.bit)
