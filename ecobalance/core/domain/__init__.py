"""
Domain models and value objects.

Content records (races, dungeons, items), pacing targets, curve points and
the balance profile.
"""

from ecobalance.core.domain.dungeon import DungeonRecord
from ecobalance.core.domain.items import ItemGrade, ItemKind, ItemRecord
from ecobalance.core.domain.leveling import LevelCurvePoint
from ecobalance.core.domain.monster_race import MonsterRaceRecord
from ecobalance.core.domain.pacing import PacingTarget
from ecobalance.core.domain.profile import (
    DEFAULT_GRADE_MULTIPLIERS,
    DEFAULT_PACING_TARGETS,
    DEFAULT_PROFILE,
    BalanceProfile,
)
from ecobalance.core.domain.snapshot import ContentSnapshot

__all__ = [
    # Content records
    "MonsterRaceRecord",
    "DungeonRecord",
    "ItemRecord",
    "ItemGrade",
    "ItemKind",
    "ContentSnapshot",
    # Pacing
    "PacingTarget",
    # Curve
    "LevelCurvePoint",
    # Profile
    "BalanceProfile",
    "DEFAULT_PROFILE",
    "DEFAULT_GRADE_MULTIPLIERS",
    "DEFAULT_PACING_TARGETS",
]
