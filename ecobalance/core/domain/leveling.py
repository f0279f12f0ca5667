"""
LevelCurvePoint — точка кривой прокачки

Все поля производные (CurveModel), модель ничего не хранит во внешнем
хранилище. HP/MP — иллюстративные справочные значения при фиксированной
базовой характеристике, а не авторитетные статы персонажа.
"""

from pydantic import BaseModel, Field


class LevelCurvePoint(BaseModel):
    """Одна строка таблицы прокачки."""

    level: int = Field(..., ge=1, description="Уровень персонажа")
    experience_required: int = Field(..., gt=0, description="Опыт до следующего уровня")
    cumulative_experience: int = Field(..., gt=0, description="Накопленный опыт 1..level")
    reference_hp: float = Field(..., gt=0, description="Справочное HP")
    reference_mp: float = Field(..., gt=0, description="Справочное MP")

    model_config = {"frozen": True}
