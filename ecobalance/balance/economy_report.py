"""
Economy Report — сводный отчёт баланса и верификация

Чистая агрегация без мутаций: все входы — явные параметры, поэтому одни и
те же входы всегда дают один и тот же отчёт. Отчёт — то, чем человек
проверяет изменение баланса перед коммитом.

Порядок секций:
1. Leveling — опыт по уровням, накопленный опыт, справочные HP/MP
2. Race rewards — базовые награды рас и убийства до level-up на опорных уровнях
3. Dungeon rewards — базовые награды, награда опорного этажа, бонус прохождения
4. Item prices — количество и средняя цена по грейдам
5. Cross-check — убийства по уровням для нескольких рас, доход vs цена
   снаряжения, кривая стоимости усиления
6. Verification — находки (ERROR и WARNING, включая цели пейсинга без
   записи расы) и общий pass/fail
7. Failures — пропущенные записи с причиной

Ошибка одной записи не прерывает отчёт: строка пропускается, запись
попадает в failures.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from ecobalance.balance.dungeon_rewards import reward_at_floor
from ecobalance.balance.price_model import GradePriceStats, grade_price_stats, mean_gear_price
from ecobalance.balance.reward_solver import PacingCheck, find_race, kills_to_level, verify_pacing
from ecobalance.core.domain.dungeon import DungeonRecord
from ecobalance.core.domain.items import ItemGrade, ItemRecord
from ecobalance.core.domain.leveling import LevelCurvePoint
from ecobalance.core.domain.monster_race import MonsterRaceRecord
from ecobalance.core.domain.profile import DEFAULT_PROFILE, BalanceProfile
from ecobalance.core.errors import BalanceError, InvalidLevel, SkippedRecord
from ecobalance.core.math.curves import (
    EnhancementStep,
    enhancement_cost_curve,
    experience_for_level,
    first_non_increasing_level,
    level_curve,
)

logger = logging.getLogger("ecobalance")


# =============================================================================
# SECTION ROWS
# =============================================================================


@dataclass(frozen=True)
class RaceRewardRow:
    race_id: str
    base_experience: int
    base_gold: int
    # (reference_level, kills) в порядке profile.kill_reference_levels
    kills_at_levels: Tuple[Tuple[int, int], ...]


@dataclass(frozen=True)
class DungeonRewardRow:
    dungeon_id: str
    base_experience: int
    base_gold: int
    reference_floor: int
    floor_experience: int
    floor_gold: int
    completion_bonus_multiplier: float


@dataclass(frozen=True)
class ItemPriceSection:
    grades: List[GradePriceStats]
    total_items: int


@dataclass(frozen=True)
class KillsRow:
    level: int
    experience_required: int
    # (race_name, kills) в порядке profile.cross_check_races
    kills: Tuple[Tuple[str, int], ...]


@dataclass(frozen=True)
class GearCostCheck:
    """Доход опорной расы против средней цены снаряжения."""

    reference_race: str
    gold_per_kill: int
    common_mean_price: int
    rare_mean_price: int
    # None если опорная раса не даёт золота
    kills_for_common: Optional[int]
    kills_for_rare: Optional[int]


@dataclass(frozen=True)
class EconomyCrossCheck:
    races: Tuple[str, ...]
    kills_by_level: List[KillsRow]
    gear_cost: GearCostCheck
    enhancement: List[EnhancementStep]


class FindingSeverity(str, Enum):
    """Серьёзность находки верификации."""

    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass(frozen=True)
class BalanceFinding:
    severity: FindingSeverity
    code: str
    subject: str
    details: str


@dataclass(frozen=True)
class EconomyReport:
    """Полный отчёт. passed == нет находок уровня ERROR."""

    level_range: Tuple[int, int]
    leveling: List[LevelCurvePoint]
    race_rewards: List[RaceRewardRow]
    dungeon_rewards: List[DungeonRewardRow]
    item_prices: ItemPriceSection
    cross_check: EconomyCrossCheck
    pacing_checks: List[PacingCheck]
    findings: List[BalanceFinding] = field(default_factory=list)
    failures: List[SkippedRecord] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not any(f.severity == FindingSeverity.ERROR for f in self.findings)


# =============================================================================
# SECTIONS
# =============================================================================


def _race_reward_rows(
    races: Sequence[MonsterRaceRecord],
    profile: BalanceProfile,
    failures: List[SkippedRecord],
) -> List[RaceRewardRow]:
    rows: List[RaceRewardRow] = []
    for race in races:
        try:
            kills = tuple(
                (level, kills_to_level(race, level, profile))
                for level in profile.kill_reference_levels
            )
        except BalanceError as e:
            failures.append(SkippedRecord.from_error(race.race_id, "race", e))
            continue
        rows.append(
            RaceRewardRow(
                race_id=race.race_id,
                base_experience=race.base_experience,
                base_gold=race.base_gold,
                kills_at_levels=kills,
            )
        )
    return rows


def _dungeon_reward_rows(
    dungeons: Sequence[DungeonRecord],
    profile: BalanceProfile,
    failures: List[SkippedRecord],
) -> List[DungeonRewardRow]:
    rows: List[DungeonRewardRow] = []
    for dungeon in dungeons:
        try:
            reward = reward_at_floor(dungeon, profile.reference_floor)
        except BalanceError as e:
            failures.append(SkippedRecord.from_error(dungeon.dungeon_id, "dungeon", e))
            continue
        rows.append(
            DungeonRewardRow(
                dungeon_id=dungeon.dungeon_id,
                base_experience=dungeon.base_experience_reward,
                base_gold=dungeon.base_gold_reward,
                reference_floor=profile.reference_floor,
                floor_experience=reward.experience,
                floor_gold=reward.gold,
                completion_bonus_multiplier=dungeon.completion_bonus_multiplier,
            )
        )
    return rows


def _cross_check(
    level_range: Tuple[int, int],
    races: Sequence[MonsterRaceRecord],
    items: Sequence[ItemRecord],
    profile: BalanceProfile,
    findings: List[BalanceFinding],
) -> EconomyCrossCheck:
    compared: Dict[str, Optional[MonsterRaceRecord]] = {}
    for name in profile.cross_check_races:
        race = find_race(races, name)
        if race is None:
            findings.append(
                BalanceFinding(
                    severity=FindingSeverity.WARNING,
                    code="cross_check_race_missing",
                    subject=name,
                    details=f"No race record matches '{name}'; kills shown as unreachable",
                )
            )
        compared[name] = race

    first, last = level_range
    kills_by_level: List[KillsRow] = []
    for level in range(first, last + 1):
        kills = tuple(
            (
                name,
                kills_to_level(race, level, profile)
                if race is not None
                else profile.unreachable_kills,
            )
            for name, race in compared.items()
        )
        kills_by_level.append(
            KillsRow(
                level=level,
                experience_required=experience_for_level(level, profile),
                kills=kills,
            )
        )

    reference = find_race(races, profile.reference_race)
    gold_per_kill = reference.base_gold if reference is not None else 0
    if reference is None:
        findings.append(
            BalanceFinding(
                severity=FindingSeverity.WARNING,
                code="reference_race_missing",
                subject=profile.reference_race,
                details="Gold income vs gear cost cannot be computed",
            )
        )

    common_mean = mean_gear_price(items, ItemGrade.COMMON, profile.gear_price_floor)
    rare_mean = mean_gear_price(items, ItemGrade.RARE, profile.gear_price_floor)

    gear_cost = GearCostCheck(
        reference_race=profile.reference_race,
        gold_per_kill=gold_per_kill,
        common_mean_price=common_mean,
        rare_mean_price=rare_mean,
        kills_for_common=common_mean // gold_per_kill if gold_per_kill > 0 else None,
        kills_for_rare=rare_mean // gold_per_kill if gold_per_kill > 0 else None,
    )

    return EconomyCrossCheck(
        races=tuple(profile.cross_check_races),
        kills_by_level=kills_by_level,
        gear_cost=gear_cost,
        enhancement=enhancement_cost_curve(profile=profile),
    )


def _verification_findings(
    level_range: Tuple[int, int],
    races: Sequence[MonsterRaceRecord],
    pacing_checks: List[PacingCheck],
    items: Sequence[ItemRecord],
    profile: BalanceProfile,
) -> List[BalanceFinding]:
    findings: List[BalanceFinding] = []

    first, last = level_range
    bad_level = first_non_increasing_level(first, last, profile)
    if bad_level is not None:
        findings.append(
            BalanceFinding(
                severity=FindingSeverity.ERROR,
                code="curve_not_increasing",
                subject=f"Lv{bad_level}",
                details=(
                    f"experience_for_level({bad_level}) <= "
                    f"experience_for_level({bad_level - 1})"
                ),
            )
        )

    for check in pacing_checks:
        if check.within_tolerance:
            continue
        findings.append(
            BalanceFinding(
                severity=FindingSeverity.ERROR,
                code="pacing_out_of_band",
                subject=check.race_id,
                details=(
                    f"Lv{check.target_level}: {check.actual_kills} kills "
                    f"(target {check.target_kills} ± {profile.pacing_tolerance_kills})"
                ),
            )
        )

    for target in profile.pacing_targets:
        if find_race(races, target.race_id) is not None:
            continue
        findings.append(
            BalanceFinding(
                severity=FindingSeverity.WARNING,
                code="pacing_target_unmatched",
                subject=target.race_id,
                details=(
                    f"No race record matches '{target.race_id}'; "
                    f"Lv{target.target_level} in {target.target_kills} kills is not verified"
                ),
            )
        )

    for item in items:
        if item.tradeable and item.sell_price <= 0:
            findings.append(
                BalanceFinding(
                    severity=FindingSeverity.ERROR,
                    code="tradeable_item_unpriced",
                    subject=item.item_id,
                    details="Tradeable item has no positive sell price",
                )
            )

    return findings


# =============================================================================
# REPORT
# =============================================================================


def build_report(
    level_range: Optional[Tuple[int, int]],
    races: Sequence[MonsterRaceRecord],
    dungeons: Sequence[DungeonRecord],
    items: Sequence[ItemRecord],
    profile: BalanceProfile = DEFAULT_PROFILE,
) -> EconomyReport:
    """
    Построение полного отчёта баланса.

    Args:
        level_range: (first, last) включительно; None → profile.report_levels
        races: Записи рас (только чтение)
        dungeons: Записи подземелий (только чтение)
        items: Записи предметов (только чтение)
        profile: Профиль баланса

    Returns:
        EconomyReport

    Raises:
        InvalidLevel: если first < 1 или last < first
    """
    if level_range is None:
        level_range = profile.report_levels
    first, last = level_range
    if first < 1:
        raise InvalidLevel(first)
    if last < first:
        raise InvalidLevel(last)

    failures: List[SkippedRecord] = []

    leveling = level_curve(first, last, profile)
    race_rows = _race_reward_rows(races, profile, failures)
    dungeon_rows = _dungeon_reward_rows(dungeons, profile, failures)

    grade_stats, item_failures = grade_price_stats(items)
    failures.extend(item_failures)

    pacing_checks, pacing_failures = verify_pacing(races, profile.pacing_targets, profile)
    failures.extend(pacing_failures)

    findings = _verification_findings((first, last), races, pacing_checks, items, profile)
    cross_check = _cross_check((first, last), races, items, profile, findings)

    for failure in failures:
        logger.warning(
            "[Balance] report skipped %s %s: %s",
            failure.record_kind,
            failure.record_id,
            failure.reason,
        )

    return EconomyReport(
        level_range=(first, last),
        leveling=leveling,
        race_rewards=race_rows,
        dungeon_rewards=dungeon_rows,
        item_prices=ItemPriceSection(grades=grade_stats, total_items=len(items)),
        cross_check=cross_check,
        pacing_checks=pacing_checks,
        findings=findings,
        failures=failures,
    )
