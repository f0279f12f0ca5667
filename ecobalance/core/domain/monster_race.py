"""
MonsterRaceRecord — Модель расы монстров

Mutable Pydantic модель: RewardSolver перезаписывает base_experience и
base_gold на месте, предыдущие значения не сохраняются.
"""

from pydantic import BaseModel, Field


class MonsterRaceRecord(BaseModel):
    """
    Раса монстров и её базовая награда за убийство.

    base_experience == 0 допустим для только что созданного контента:
    диагностика трактует его как "недостижимо" (см. kills_to_level).
    """

    race_id: str = Field(..., min_length=1, description="Уникальный идентификатор расы")
    base_experience: int = Field(0, ge=0, description="Базовый опыт за убийство")
    base_gold: int = Field(0, ge=0, description="Базовое золото за убийство")

    model_config = {"validate_assignment": True}
