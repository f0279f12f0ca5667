"""
ContentSnapshot — коллекции записей, переданные движку вызывающим кодом

Снапшот принадлежит внешнему хранилищу контента; движок получает его по
ссылке и либо читает, либо мутирует отдельные записи на месте.
"""

from typing import List

from pydantic import BaseModel, Field, model_validator

from .dungeon import DungeonRecord
from .items import ItemRecord
from .monster_race import MonsterRaceRecord


class ContentSnapshot(BaseModel):
    """Снапшот контента: расы, подземелья, предметы."""

    races: List[MonsterRaceRecord] = Field(default_factory=list)
    dungeons: List[DungeonRecord] = Field(default_factory=list)
    items: List[ItemRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_race_ids(self) -> "ContentSnapshot":
        """race_id уникален в пределах снапшота."""
        seen = set()
        for race in self.races:
            if race.race_id in seen:
                raise ValueError(f"duplicate race_id '{race.race_id}'")
            seen.add(race.race_id)
        return self
