"""
Reward Solver — обратный расчёт базовых наград расы по цели пейсинга

Два независимо тестируемых направления:
- solve (inverse): цель пейсинга → (base_experience, base_gold)
- verify (forward): текущие записи рас → фактическое число убийств до level-up

Запись результата в MonsterRaceRecord — отдельный шаг (apply_solution),
который вызывающий код композирует с solve.

ФОРМУЛЫ (профиль по умолчанию):
    E = experience_for_level(target_level)
    base_experience = max(1, floor(E / target_kills))
    base_gold = max(5, floor(base_experience / 4))
    kills_to_level(race, L) = ceil(experience_for_level(L) / race.base_experience)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. target_kills <= 0 → InvalidPacingTarget, деление не выполняется
2. base_experience >= 1 и base_gold >= 5 для любой валидной цели
3. kills_to_level(applied, target_level) <= target_kills + 1
4. base_experience <= 0 в диагностике → сентинел unreachable_kills (999)
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ecobalance.core.domain.monster_race import MonsterRaceRecord
from ecobalance.core.domain.pacing import PacingTarget
from ecobalance.core.domain.profile import DEFAULT_PROFILE, BalanceProfile
from ecobalance.core.errors import BalanceError, InvalidPacingTarget, SkippedRecord
from ecobalance.core.math.curves import experience_for_level
from ecobalance.core.math.numerical_safeguards import ceil_div

logger = logging.getLogger("ecobalance")


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class RewardSolution:
    """Решение для одной цели пейсинга."""

    race_id: str
    target_level: int
    target_kills: int
    experience_required: int
    base_experience: int
    base_gold: int


@dataclass(frozen=True)
class PacingApplication:
    """Решение, записанное в конкретную запись расы."""

    race_id: str
    target: PacingTarget
    previous_experience: int
    previous_gold: int
    new_experience: int
    new_gold: int


@dataclass(frozen=True)
class PacingBatchResult:
    """Результат пакетного solve + apply."""

    applied: List[PacingApplication]
    failures: List[SkippedRecord]
    unmatched_targets: List[str]


@dataclass(frozen=True)
class PacingCheck:
    """Forward-проверка одной цели против текущих данных."""

    race_id: str
    target_level: int
    target_kills: int
    actual_kills: int
    deviation: int
    within_tolerance: bool


# =============================================================================
# SOLVE (INVERSE)
# =============================================================================


def solve_base_reward(
    target: PacingTarget,
    profile: BalanceProfile = DEFAULT_PROFILE,
) -> RewardSolution:
    """
    Обратный расчёт базового опыта и золота расы.

    Args:
        target: Цель пейсинга
        profile: Профиль баланса

    Returns:
        RewardSolution

    Raises:
        InvalidPacingTarget: если target.target_kills <= 0
        InvalidLevel: если target.target_level < 1

    Examples:
        >>> s = solve_base_reward(PacingTarget(race_id="Goblin", target_level=1, target_kills=25))
        >>> (s.base_experience, s.base_gold)
        (4, 5)
    """
    if target.target_kills <= 0:
        raise InvalidPacingTarget(target.race_id, target.target_kills)

    required = experience_for_level(target.target_level, profile)
    base_experience = max(profile.min_base_experience, required // target.target_kills)
    base_gold = max(
        profile.min_base_gold, base_experience // profile.gold_per_experience_divisor
    )

    return RewardSolution(
        race_id=target.race_id,
        target_level=target.target_level,
        target_kills=target.target_kills,
        experience_required=required,
        base_experience=base_experience,
        base_gold=base_gold,
    )


def apply_solution(
    race: MonsterRaceRecord,
    target: PacingTarget,
    solution: RewardSolution,
) -> PacingApplication:
    """
    Перезапись base_experience/base_gold записи расы на месте.

    Предыдущие значения возвращаются только для журнала: отмена изменений
    не является ответственностью ядра.
    """
    previous_experience = race.base_experience
    previous_gold = race.base_gold

    race.base_experience = solution.base_experience
    race.base_gold = solution.base_gold

    logger.info(
        "[Balance] %s: EXP=%d, Gold=%d (Lv%d in %d kills; was EXP=%d, Gold=%d)",
        race.race_id,
        solution.base_experience,
        solution.base_gold,
        target.target_level,
        target.target_kills,
        previous_experience,
        previous_gold,
    )

    return PacingApplication(
        race_id=race.race_id,
        target=target,
        previous_experience=previous_experience,
        previous_gold=previous_gold,
        new_experience=solution.base_experience,
        new_gold=solution.base_gold,
    )


def match_target(race_id: str, targets: Sequence[PacingTarget]) -> Optional[PacingTarget]:
    """
    Первая цель, имя расы которой входит в идентификатор записи.

    Идентификаторы контента имеют вид "Goblin_Race", "Undead_Elite" и т.п.

    Examples:
        >>> t = match_target("Goblin_Race", (PacingTarget(race_id="Goblin", target_level=1, target_kills=25),))
        >>> t.race_id
        'Goblin'
    """
    for target in targets:
        if target.race_id in race_id:
            return target
    return None


def find_race(
    races: Iterable[MonsterRaceRecord], race_name: str
) -> Optional[MonsterRaceRecord]:
    """Первая запись, идентификатор которой содержит race_name."""
    for race in races:
        if race_name in race.race_id:
            return race
    return None


def solve_and_apply_pacing(
    races: Sequence[MonsterRaceRecord],
    targets: Optional[Sequence[PacingTarget]] = None,
    profile: BalanceProfile = DEFAULT_PROFILE,
) -> PacingBatchResult:
    """
    Пакетный solve + apply для всех рас.

    Каждая запись сопоставляется с первой подходящей целью; записи без цели
    не изменяются. Ошибка решения одной цели записывается в failures и не
    прерывает пакет. Цели, не нашедшие ни одной записи, возвращаются в
    unmatched_targets.

    Args:
        races: Записи рас (мутируются на месте)
        targets: Цели пейсинга (default: profile.pacing_targets)
        profile: Профиль баланса
    """
    if targets is None:
        targets = profile.pacing_targets

    applied: List[PacingApplication] = []
    failures: List[SkippedRecord] = []
    matched_names = set()

    for race in races:
        target = match_target(race.race_id, targets)
        if target is None:
            continue
        matched_names.add(target.race_id)

        try:
            solution = solve_base_reward(target, profile)
        except BalanceError as e:
            logger.warning("[Balance] skipped race %s: %s", race.race_id, e)
            failures.append(SkippedRecord.from_error(race.race_id, "race", e))
            continue

        applied.append(apply_solution(race, target, solution))

    unmatched = [t.race_id for t in targets if t.race_id not in matched_names]

    logger.info("[Balance] %d monster race rewards adjusted", len(applied))

    return PacingBatchResult(applied=applied, failures=failures, unmatched_targets=unmatched)


# =============================================================================
# VERIFY (FORWARD)
# =============================================================================


def kills_to_level(
    race: MonsterRaceRecord,
    level: int,
    profile: BalanceProfile = DEFAULT_PROFILE,
) -> int:
    """
    Число убийств расы, необходимое для level-up на уровне level.

    Диагностический путь: раса без опыта даёт сентинел unreachable_kills
    вместо ошибки деления.

    Raises:
        InvalidLevel: если level < 1

    Examples:
        >>> kills_to_level(MonsterRaceRecord(race_id="Goblin", base_experience=4, base_gold=5), 10)
        791
        >>> kills_to_level(MonsterRaceRecord(race_id="Empty"), 1)
        999
    """
    required = experience_for_level(level, profile)
    if race.base_experience <= 0:
        return profile.unreachable_kills
    return ceil_div(required, race.base_experience)


def verify_pacing(
    races: Sequence[MonsterRaceRecord],
    targets: Optional[Sequence[PacingTarget]] = None,
    profile: BalanceProfile = DEFAULT_PROFILE,
) -> Tuple[List[PacingCheck], List[SkippedRecord]]:
    """
    Forward-проверка целей пейсинга против текущих записей.

    Для каждой цели берётся первая запись расы, идентификатор которой содержит
    имя цели. Цели без записи пропускаются (их видно в unmatched_targets
    пакетного решения и в находках отчёта pacing_target_unmatched).

    Returns:
        (checks, failures)
    """
    if targets is None:
        targets = profile.pacing_targets

    checks: List[PacingCheck] = []
    failures: List[SkippedRecord] = []

    for target in targets:
        race = find_race(races, target.race_id)
        if race is None:
            continue
        try:
            actual = kills_to_level(race, target.target_level, profile)
        except BalanceError as e:
            failures.append(SkippedRecord.from_error(target.race_id, "pacing_target", e))
            continue

        deviation = actual - target.target_kills
        checks.append(
            PacingCheck(
                race_id=race.race_id,
                target_level=target.target_level,
                target_kills=target.target_kills,
                actual_kills=actual,
                deviation=deviation,
                within_tolerance=abs(deviation) <= profile.pacing_tolerance_kills,
            )
        )

    return checks, failures
