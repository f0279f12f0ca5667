"""
JSON Schema Contract Validators

Валидация JSON входов (снапшот контента, профиль баланса) по формальным
JSON Schema контрактам до парсинга в Pydantic модели. Схема ловит
структурные ошибки (лишние/отсутствующие поля, типы) с путём до поля,
Pydantic — доменные ограничения.

Схемы (ecobalance/core/contracts/schema/):
- content_snapshot.json
- balance_profile.json
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'content_snapshot')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Базовый класс: валидация данных против одной JSON Schema."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


class ContentSnapshotValidator(ContractValidator):
    """Валидатор снапшота контента (races / dungeons / items)."""

    def __init__(self):
        super().__init__("content_snapshot")


class BalanceProfileValidator(ContractValidator):
    """Валидатор JSON профиля баланса."""

    def __init__(self):
        super().__init__("balance_profile")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_content_snapshot(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют content_snapshot.json
    """
    ContentSnapshotValidator().validate(data)


def validate_balance_profile(data: Dict[str, Any]) -> None:
    """
    Raises:
        ValidationError: Если данные не соответствуют balance_profile.json
    """
    BalanceProfileValidator().validate(data)
