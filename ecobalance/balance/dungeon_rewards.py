"""
Dungeon Reward Model — награды подземелья по этажам

ФОРМУЛЫ:
    experience(N) = floor(base_experience * exp_multiplier ** (N - 1))
    gold(N)       = floor(base_gold * gold_multiplier ** (N - 1))
    completion    = floor(reward(floor_count) * completion_bonus)
    full_clear    = floor(Σ_{N=1..floor_count} reward(N) * completion_bonus)

Модель только считает множители. Проверка, что забег действительно пройден
целиком, — ответственность вызывающего кода.
"""

from typing import List, NamedTuple

from ecobalance.core.domain.dungeon import DungeonRecord
from ecobalance.core.errors import FloorOutOfRange
from ecobalance.core.math.numerical_safeguards import floor_scaled_power


class FloorReward(NamedTuple):
    """Опыт и золото за этаж (или за прохождение)."""

    experience: int
    gold: int


def reward_at_floor(dungeon: DungeonRecord, floor: int) -> FloorReward:
    """
    Награда за этаж floor.

    Raises:
        FloorOutOfRange: если floor вне [1, dungeon.floor_count]

    Examples:
        >>> d = DungeonRecord(dungeon_id="crypt")
        >>> reward_at_floor(d, 1)
        FloorReward(experience=1000, gold=500)
        >>> reward_at_floor(d, 2)
        FloorReward(experience=1200, gold=550)
    """
    if floor < 1 or floor > dungeon.floor_count:
        raise FloorOutOfRange(dungeon.dungeon_id, floor, dungeon.floor_count)

    exponent = floor - 1
    return FloorReward(
        experience=floor_scaled_power(
            dungeon.base_experience_reward, dungeon.exp_multiplier_per_floor, exponent
        ),
        gold=floor_scaled_power(
            dungeon.base_gold_reward, dungeon.gold_multiplier_per_floor, exponent
        ),
    )


def floor_reward_table(dungeon: DungeonRecord) -> List[FloorReward]:
    """Награды всех этажей по порядку, индекс 0 = этаж 1."""
    return [reward_at_floor(dungeon, floor) for floor in range(1, dungeon.floor_count + 1)]


def completion_reward(dungeon: DungeonRecord) -> FloorReward:
    """Награда последнего этажа с бонусом за прохождение."""
    final = reward_at_floor(dungeon, dungeon.floor_count)
    bonus = dungeon.completion_bonus_multiplier
    return FloorReward(
        experience=floor_scaled_power(final.experience, bonus, 1),
        gold=floor_scaled_power(final.gold, bonus, 1),
    )


def full_clear_reward(dungeon: DungeonRecord) -> FloorReward:
    """Сумма наград всех этажей с бонусом за прохождение."""
    table = floor_reward_table(dungeon)
    bonus = dungeon.completion_bonus_multiplier
    return FloorReward(
        experience=floor_scaled_power(sum(r.experience for r in table), bonus, 1),
        gold=floor_scaled_power(sum(r.gold for r in table), bonus, 1),
    )
