"""Shared enumerations and constants.

Levels and pillars are closed sets. Consumers that render level order
or the threshold value import them from here rather than hard-coding.
"""

from __future__ import annotations

from enum import Enum


class Level(str, Enum):
    """Maturity tier, L1 (lowest) through L5 (highest)."""

    L1 = "L1"
    L2 = "L2"
    L3 = "L3"
    L4 = "L4"
    L5 = "L5"


class Pillar(str, Enum):
    """Repository health category, independent of the level axis."""

    DOCS = "docs"
    STYLE = "style"
    BUILD = "build"
    TEST = "test"
    SECURITY = "security"
    OBSERVABILITY = "observability"
    ENV = "env"
    TASK_DISCOVERY = "task_discovery"
    PRODUCT = "product"


class ActionPriority(str, Enum):
    """Priority of a remediation suggestion."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Ordered, never skipped
LEVELS: tuple[Level, ...] = tuple(Level)

PILLARS: tuple[Pillar, ...] = tuple(Pillar)

PRIORITY_ORDER: tuple[ActionPriority, ...] = tuple(ActionPriority)

LEVEL_NAMES: dict[Level, str] = {
    Level.L1: "Functional",
    Level.L2: "Documented",
    Level.L3: "Standardized",
    Level.L4: "Optimized",
    Level.L5: "Autonomous",
}

PILLAR_NAMES: dict[Pillar, str] = {
    Pillar.DOCS: "Documentation",
    Pillar.STYLE: "Code Style",
    Pillar.BUILD: "Build System & CI/CD",
    Pillar.TEST: "Testing",
    Pillar.SECURITY: "Security",
    Pillar.OBSERVABILITY: "Observability",
    Pillar.ENV: "Environment",
    Pillar.TASK_DISCOVERY: "Task Discovery",
    Pillar.PRODUCT: "Product & Experimentation",
}

# Fraction of checks that must pass for a level gate to open
PASSING_THRESHOLD = 0.8


def next_level(level: Level | None) -> Level | None:
    """Return the level after ``level``.

    L1 when nothing has been achieved yet, None past L5.
    """
    if level is None:
        return LEVELS[0]
    index = LEVELS.index(level)
    if index + 1 < len(LEVELS):
        return LEVELS[index + 1]
    return None


def percent(passed: int, total: int, empty: int = 0) -> int:
    """Integer percentage of ``passed`` over ``total``, rounding half up.

    Returns ``empty`` when ``total`` is zero. Integer arithmetic keeps
    12.5 -> 13 exact where float rounding would go to even.
    """
    if total == 0:
        return empty
    return (200 * passed + total) // (2 * total)


__all__ = [
    "Level",
    "Pillar",
    "ActionPriority",
    "LEVELS",
    "PILLARS",
    "PRIORITY_ORDER",
    "LEVEL_NAMES",
    "PILLAR_NAMES",
    "PASSING_THRESHOLD",
    "next_level",
    "percent",
]
