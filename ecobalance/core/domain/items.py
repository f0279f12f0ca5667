"""
ItemRecord — Модель предмета для ценообразования

Mutable Pydantic модель: PriceModel перезаписывает sell_price на месте.
Грейд хранится как ординальное целое, чтобы запись из внешнего хранилища
с неизвестным грейдом можно было загрузить и отклонить на этапе
ценообразования (UnknownGrade), а не при парсинге всего снапшота.
"""

from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class ItemGrade(IntEnum):
    """Ординальный грейд (редкость) предмета."""

    NONE = 0
    COMMON = 1
    UNCOMMON = 2
    RARE = 3
    EPIC = 4
    LEGENDARY = 5

    @classmethod
    def is_known(cls, value: int) -> bool:
        return value in cls._value2member_map_


class ItemKind(str, Enum):
    """Тип предмета"""

    EQUIPMENT = "equipment"
    CONSUMABLE = "consumable"
    MATERIAL = "material"
    QUEST = "quest"
    OTHER = "other"


# =============================================================================
# ITEM MODEL
# =============================================================================


class ItemRecord(BaseModel):
    """
    Предмет контента.

    Инвариант после прохода ценообразования: sell_price > 0 для tradeable
    предметов (проверяется верификацией отчёта, а не моделью).
    """

    item_id: str = Field(..., min_length=1, description="Идентификатор предмета")
    grade: int = Field(
        ..., description="Ординальный грейд (ItemGrade: 0=None .. 5=Legendary)"
    )
    kind: ItemKind = Field(ItemKind.EQUIPMENT, description="Тип предмета")
    weapon_max_damage: Optional[float] = Field(
        None, ge=0, description="Максимальный урон оружия (None для не-оружия)"
    )
    sell_price: int = Field(0, ge=0, description="Текущая цена продажи")
    tradeable: bool = Field(True, description="Участвует ли предмет в торговле")

    model_config = {"validate_assignment": True}

    @property
    def is_equipment(self) -> bool:
        return self.kind == ItemKind.EQUIPMENT

    @property
    def is_weapon(self) -> bool:
        """Оружие = экипировка с известным положительным максимальным уроном."""
        return (
            self.is_equipment
            and self.weapon_max_damage is not None
            and self.weapon_max_damage > 0
        )
