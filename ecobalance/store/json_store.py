"""
JSON Store — файловый адаптер снапшота контента и профиля баланса

Стоит на месте внешнего хранилища контента для CLI и тестов. Сам движок
файлов не касается: он получает уже распарсенные записи.

Порядок загрузки: json → JSON Schema (структура) → Pydantic (домен).
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from ecobalance.core.contracts.validators import (
    validate_balance_profile,
    validate_content_snapshot,
)
from ecobalance.core.domain.profile import BalanceProfile
from ecobalance.core.domain.snapshot import ContentSnapshot

logger = logging.getLogger("ecobalance")

PathLike = Union[str, Path]


def _read_json(path: PathLike) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def parse_snapshot(data: Dict[str, Any]) -> ContentSnapshot:
    """
    dict → ContentSnapshot.

    Raises:
        jsonschema.ValidationError: структура не соответствует схеме
        pydantic.ValidationError: нарушены доменные ограничения
    """
    validate_content_snapshot(data)
    return ContentSnapshot.model_validate(data)


def load_snapshot(path: PathLike) -> ContentSnapshot:
    """Загрузка снапшота контента из JSON файла."""
    snapshot = parse_snapshot(_read_json(path))
    logger.debug(
        "Loaded snapshot %s: %d races, %d dungeons, %d items",
        path,
        len(snapshot.races),
        len(snapshot.dungeons),
        len(snapshot.items),
    )
    return snapshot


def dump_snapshot(snapshot: ContentSnapshot, path: PathLike) -> None:
    """Запись снапшота (после solve/reprice) обратно в JSON файл."""
    data = snapshot.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.write("\n")
    logger.info("Saved snapshot to %s", path)


def parse_profile(data: Dict[str, Any]) -> BalanceProfile:
    """
    dict → BalanceProfile; отсутствующие поля берутся по умолчанию.

    Raises:
        jsonschema.ValidationError: структура не соответствует схеме
        pydantic.ValidationError: нарушены доменные ограничения
    """
    validate_balance_profile(data)
    return BalanceProfile.model_validate(data)


def load_profile(path: PathLike) -> BalanceProfile:
    """Загрузка альтернативного профиля баланса из JSON файла."""
    return parse_profile(_read_json(path))
