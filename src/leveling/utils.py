"""
XP -> level mapping.

level = floor(xp / 100) + 1, never below 1. The level is always derived from
XP and never persisted on its own.
"""
from dataclasses import dataclass

XP_PER_LEVEL = 100


@dataclass(frozen=True)
class LevelProgress:
    level: int
    xp: int
    level_start_xp: int
    next_level_xp: int

    @property
    def xp_into_level(self) -> int:
        return self.xp - self.level_start_xp

    @property
    def xp_to_next_level(self) -> int:
        return self.next_level_xp - self.xp


def level_for_xp(xp: int) -> int:
    # Negative XP should never be stored; clamp to level 1 anyway
    return max(1, xp // XP_PER_LEVEL + 1)


def xp_for_level(level: int) -> int:
    """Minimum XP needed to be at `level`."""
    return (max(1, level) - 1) * XP_PER_LEVEL


def level_progress(xp: int) -> LevelProgress:
    xp = max(0, xp)
    level = level_for_xp(xp)
    return LevelProgress(
        level=level,
        xp=xp,
        level_start_xp=xp_for_level(level),
        next_level_xp=xp_for_level(level + 1),
    )
