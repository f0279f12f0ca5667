"""
BalanceProfile — именованный набор констант баланса

Immutable Pydantic модель. Каждая функция моделей принимает profile явным
параметром (по умолчанию DEFAULT_PROFILE), поэтому альтернативный профиль
можно протестировать без изменения кода.

Значения по умолчанию:
    experience_for_level(L) = floor(100 * L ** 1.5)
    reference_hp(L) = 100 + (10 + 2 * L) * 10
    reference_mp(L) = 50 + (10 + 1.5 * L) * 5
    enhance_cost(t) = floor(100 * 1.8 ** t), t = 0..9
    base_gold = max(5, floor(base_experience / 4))
    grade multipliers: None 1.0, Common 1.0, Uncommon 1.5, Rare 3.0, Epic 7.0, Legendary 20.0
"""

from typing import Dict, Tuple

from pydantic import BaseModel, Field, field_validator

from .items import ItemGrade
from .pacing import PacingTarget


# =============================================================================
# DEFAULT TABLES
# =============================================================================

DEFAULT_GRADE_MULTIPLIERS: Dict[str, float] = {
    ItemGrade.NONE.name: 1.0,
    ItemGrade.COMMON.name: 1.0,
    ItemGrade.UNCOMMON.name: 1.5,
    ItemGrade.RARE.name: 3.0,
    ItemGrade.EPIC.name: 7.0,
    ItemGrade.LEGENDARY.name: 20.0,
}

# Рекомендуемые монстры по уровням: Lv1 ~20-30 убийств, Lv5 ~25-35, Lv10 ~30-40
DEFAULT_PACING_TARGETS: Tuple[PacingTarget, ...] = (
    PacingTarget(race_id="Goblin", target_level=1, target_kills=25),
    PacingTarget(race_id="Orc", target_level=3, target_kills=28),
    PacingTarget(race_id="Beast", target_level=3, target_kills=30),
    PacingTarget(race_id="Undead", target_level=5, target_kills=30),
    PacingTarget(race_id="Elemental", target_level=7, target_kills=32),
    PacingTarget(race_id="Demon", target_level=8, target_kills=35),
    PacingTarget(race_id="Construct", target_level=6, target_kills=30),
    PacingTarget(race_id="Dragon", target_level=10, target_kills=40),
)


# =============================================================================
# PROFILE MODEL
# =============================================================================


class BalanceProfile(BaseModel):
    """Профиль баланса: все числа, которые иначе были бы magic numbers."""

    # Кривая опыта
    exp_curve_base: int = Field(100, gt=0, description="Множитель кривой опыта")
    exp_curve_exponent: float = Field(1.5, ge=0, description="Показатель степени кривой")

    # Справочные HP/MP (базовая VIT/INT)
    vitality_baseline: float = Field(10.0, ge=0, description="Базовая характеристика")
    hp_base: float = Field(100.0, gt=0)
    hp_vit_per_level: float = Field(2.0, ge=0)
    hp_per_vitality: float = Field(10.0, ge=0)
    mp_base: float = Field(50.0, gt=0)
    mp_int_per_level: float = Field(1.5, ge=0)
    mp_per_intelligence: float = Field(5.0, ge=0)

    # Кривая стоимости усиления
    enhance_base_cost: int = Field(100, gt=0, description="Стоимость +0 → +1")
    enhance_growth_rate: float = Field(1.8, gt=1.0, description="Рост стоимости за тир")
    enhance_max_tier: int = Field(9, ge=0, description="Последний тир кривой")

    # Решатель наград
    min_base_experience: int = Field(1, ge=1, description="Нижняя граница опыта за убийство")
    min_base_gold: int = Field(5, ge=1, description="Нижняя граница золота за убийство")
    gold_per_experience_divisor: int = Field(4, gt=0, description="gold = exp // divisor")
    unreachable_kills: int = Field(
        999, gt=0, description="Сентинел для расы без опыта в диагностике"
    )

    # Ценообразование
    grade_multipliers: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_GRADE_MULTIPLIERS),
        description="Множитель цены по имени грейда",
    )
    weapon_price_per_damage: float = Field(10.0, gt=0)
    armor_min_base_price: int = Field(10, gt=0)

    # Отчёт
    report_levels: Tuple[int, int] = Field((1, 15), description="Диапазон уровней отчёта")
    kill_reference_levels: Tuple[int, ...] = Field(
        (1, 10), min_length=1, description="Уровни для колонок убийств в таблице рас"
    )
    reference_floor: int = Field(10, ge=1, description="Этаж для колонки наград подземелий")
    reference_race: str = Field("Goblin", min_length=1, description="Раса для расчёта дохода")
    cross_check_races: Tuple[str, ...] = Field(
        ("Goblin", "Orc", "Undead", "Dragon"), min_length=1
    )
    gear_price_floor: int = Field(
        50, ge=0, description="Предметы дешевле или равные не считаются снаряжением"
    )
    pacing_tolerance_kills: int = Field(5, ge=0, description="Допуск отклонения от цели")
    pacing_targets: Tuple[PacingTarget, ...] = Field(DEFAULT_PACING_TARGETS)

    model_config = {"frozen": True}

    @field_validator("grade_multipliers")
    @classmethod
    def validate_grade_table(cls, v: Dict[str, float]) -> Dict[str, float]:
        """Таблица должна покрывать все грейды, множители положительные."""
        missing = [g.name for g in ItemGrade if g.name not in v]
        if missing:
            raise ValueError(f"grade_multipliers missing grades: {missing}")
        unknown = [name for name in v if name not in ItemGrade.__members__]
        if unknown:
            raise ValueError(f"grade_multipliers has unknown grades: {unknown}")
        for name, mult in v.items():
            if mult <= 0:
                raise ValueError(f"grade multiplier for {name} must be positive, got {mult}")
        return v

    @field_validator("report_levels")
    @classmethod
    def validate_report_levels(cls, v: Tuple[int, int]) -> Tuple[int, int]:
        first, last = v
        if first < 1 or last < first:
            raise ValueError(f"report_levels must satisfy 1 <= first <= last, got {v}")
        return v

    @field_validator("kill_reference_levels")
    @classmethod
    def validate_kill_reference_levels(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        """Опорные уровни таблицы рас начинаются с 1."""
        invalid = [level for level in v if level < 1]
        if invalid:
            raise ValueError(f"kill_reference_levels must be >= 1, got {invalid}")
        return v

    def multiplier_for(self, grade: ItemGrade) -> float:
        return self.grade_multipliers[grade.name]


DEFAULT_PROFILE = BalanceProfile()
