"""
PacingTarget — цель пейсинга

"Персонаж уровня target_level должен получить уровень за target_kills
убийств монстров расы race_id."

Transient вход для RewardSolver. target_kills намеренно не ограничен
моделью: неположительное значение отклоняется решателем (InvalidPacingTarget),
чтобы одна плохая цель в пакете не ломала парсинг всего профиля.
"""

from pydantic import BaseModel, Field


class PacingTarget(BaseModel):
    """Цель пейсинга для одной расы."""

    race_id: str = Field(..., min_length=1, description="Имя расы (ищется как подстрока id)")
    target_level: int = Field(..., description="Уровень, на котором считается пейсинг")
    target_kills: int = Field(..., description="Желаемое число убийств до level-up")

    model_config = {"frozen": True}
