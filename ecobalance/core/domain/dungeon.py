"""
DungeonRecord — Модель подземелья

Immutable Pydantic модель: ядро только читает подземелья.
Значения по умолчанию соответствуют шаблону нового подземелья в контенте.
"""

from pydantic import BaseModel, Field


class DungeonRecord(BaseModel):
    """
    Подземелье с мультипликативным ростом награды по этажам.

    Награда этажа N: base * multiplier ** (N - 1).
    """

    dungeon_id: str = Field(..., min_length=1, description="Идентификатор подземелья")
    base_experience_reward: int = Field(1000, ge=0, description="Опыт за 1-й этаж")
    base_gold_reward: int = Field(500, ge=0, description="Золото за 1-й этаж")
    exp_multiplier_per_floor: float = Field(
        1.2, gt=1.0, description="Множитель опыта на каждый следующий этаж"
    )
    gold_multiplier_per_floor: float = Field(
        1.1, gt=1.0, description="Множитель золота на каждый следующий этаж"
    )
    completion_bonus_multiplier: float = Field(
        2.0, ge=1.0, description="Бонус за полное прохождение"
    )
    floor_count: int = Field(10, ge=1, description="Количество этажей")

    model_config = {"frozen": True}
