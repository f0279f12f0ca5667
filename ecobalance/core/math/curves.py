"""
Curves — кривая опыта и кривая стоимости усиления

Чистые детерминированные функции закрытых формул. Все константы берутся из
BalanceProfile, переданного явно.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. experience_for_level определена только для level >= 1 (иначе InvalidLevel)
2. experience_for_level строго возрастает по level при exponent > 0
3. cumulative_experience(L) == cumulative_experience(L-1) + experience_for_level(L)
   (накопление бегущей суммой целых, а не закрытой формулой: без дрейфа float)
4. Степени считаются точно (floor_scaled_power), поэтому floor верен
   и для больших уровней и тиров

ФОРМУЛЫ (профиль по умолчанию):
    experience_for_level(L) = floor(100 * L ** 1.5)
    cumulative_experience(L) = Σ_{k=1..L} experience_for_level(k)
    reference_hp(L) = 100 + (10 + 2 * L) * 10
    reference_mp(L) = 50 + (10 + 1.5 * L) * 5
    enhance_cost(t) = floor(100 * 1.8 ** t)
"""

from typing import List, NamedTuple, Optional

from ecobalance.core.domain.leveling import LevelCurvePoint
from ecobalance.core.domain.profile import DEFAULT_PROFILE, BalanceProfile
from ecobalance.core.errors import InvalidLevel
from ecobalance.core.math.numerical_safeguards import floor_scaled_power


# =============================================================================
# EXPERIENCE CURVE
# =============================================================================


def _check_level(level: int) -> None:
    if level < 1:
        raise InvalidLevel(level)


def experience_for_level(level: int, profile: BalanceProfile = DEFAULT_PROFILE) -> int:
    """
    Опыт, необходимый на уровне level для перехода на level + 1.

    Args:
        level: Уровень персонажа (>= 1)
        profile: Профиль баланса

    Returns:
        floor(exp_curve_base * level ** exp_curve_exponent)

    Raises:
        InvalidLevel: если level < 1

    Examples:
        >>> experience_for_level(1)
        100
        >>> experience_for_level(10)
        3162
    """
    _check_level(level)
    return floor_scaled_power(profile.exp_curve_base, level, profile.exp_curve_exponent)


def cumulative_experience(level: int, profile: BalanceProfile = DEFAULT_PROFILE) -> int:
    """
    Суммарный опыт уровней 1..level (бегущая сумма).

    Raises:
        InvalidLevel: если level < 1

    Examples:
        >>> cumulative_experience(1)
        100
        >>> cumulative_experience(2)
        382
    """
    _check_level(level)
    total = 0
    for k in range(1, level + 1):
        total += experience_for_level(k, profile)
    return total


def reference_hp(level: int, profile: BalanceProfile = DEFAULT_PROFILE) -> float:
    """
    Справочное HP при базовой VIT.

    Examples:
        >>> reference_hp(1)
        220.0
    """
    _check_level(level)
    vitality = profile.vitality_baseline + profile.hp_vit_per_level * level
    return profile.hp_base + vitality * profile.hp_per_vitality


def reference_mp(level: int, profile: BalanceProfile = DEFAULT_PROFILE) -> float:
    """
    Справочное MP при базовой INT.

    Examples:
        >>> reference_mp(2)
        115.0
    """
    _check_level(level)
    intelligence = profile.vitality_baseline + profile.mp_int_per_level * level
    return profile.mp_base + intelligence * profile.mp_per_intelligence


def level_curve(
    first_level: int,
    last_level: int,
    profile: BalanceProfile = DEFAULT_PROFILE,
) -> List[LevelCurvePoint]:
    """
    Таблица прокачки для уровней first_level..last_level включительно.

    Накопленный опыт считается одной бегущей суммой с уровня 1, поэтому
    таблица, начинающаяся не с 1, содержит те же cumulative значения.

    Raises:
        InvalidLevel: если first_level < 1 или last_level < first_level
    """
    _check_level(first_level)
    if last_level < first_level:
        raise InvalidLevel(last_level)

    points: List[LevelCurvePoint] = []
    cumulative = 0
    for level in range(1, last_level + 1):
        required = experience_for_level(level, profile)
        cumulative += required
        if level < first_level:
            continue
        points.append(
            LevelCurvePoint(
                level=level,
                experience_required=required,
                cumulative_experience=cumulative,
                reference_hp=reference_hp(level, profile),
                reference_mp=reference_mp(level, profile),
            )
        )
    return points


def first_non_increasing_level(
    first_level: int,
    last_level: int,
    profile: BalanceProfile = DEFAULT_PROFILE,
) -> Optional[int]:
    """
    Первый уровень L в (first_level, last_level], где
    experience_for_level(L) <= experience_for_level(L - 1); None если кривая
    строго возрастает на всём диапазоне.
    """
    _check_level(first_level)
    previous = experience_for_level(first_level, profile)
    for level in range(first_level + 1, last_level + 1):
        current = experience_for_level(level, profile)
        if current <= previous:
            return level
        previous = current
    return None


# =============================================================================
# ENHANCEMENT COST CURVE
# =============================================================================


class EnhancementStep(NamedTuple):
    """Шаг усиления +tier → +tier+1."""

    tier: int
    cost: int
    cumulative_cost: int


def enhance_cost(tier: int, profile: BalanceProfile = DEFAULT_PROFILE) -> int:
    """
    Стоимость усиления +tier → +tier+1.

    Raises:
        ValueError: если tier < 0

    Examples:
        >>> enhance_cost(0)
        100
        >>> enhance_cost(3)
        583
    """
    if tier < 0:
        raise ValueError(f"tier must be non-negative, got {tier}")
    return floor_scaled_power(profile.enhance_base_cost, profile.enhance_growth_rate, tier)


def enhancement_cost_curve(
    max_tier: Optional[int] = None,
    profile: BalanceProfile = DEFAULT_PROFILE,
) -> List[EnhancementStep]:
    """
    Кривая усиления для тиров 0..max_tier с бегущей суммой.

    Args:
        max_tier: Последний тир (default: profile.enhance_max_tier)
        profile: Профиль баланса

    Returns:
        Список EnhancementStep длины max_tier + 1
    """
    if max_tier is None:
        max_tier = profile.enhance_max_tier
    if max_tier < 0:
        raise ValueError(f"max_tier must be non-negative, got {max_tier}")

    steps: List[EnhancementStep] = []
    cumulative = 0
    for tier in range(max_tier + 1):
        cost = enhance_cost(tier, profile)
        cumulative += cost
        steps.append(EnhancementStep(tier=tier, cost=cost, cumulative_cost=cumulative))
    return steps
