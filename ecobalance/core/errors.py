"""
Balance Errors — типизированные ошибки движка баланса

Все ошибки локальные, синхронные и детерминированные: повтор вызова с теми же
входами даст ту же ошибку, поэтому retry не предусмотрен.

Пакетные операции (все расы, все предметы, весь отчёт) ловят BalanceError
на уровне одной записи и продолжают работу, записывая SkippedRecord.
"""

from dataclasses import dataclass


# =============================================================================
# EXCEPTIONS
# =============================================================================


class BalanceError(Exception):
    """Базовая ошибка валидации для одной записи или одного вызова."""

    pass


class InvalidLevel(BalanceError):
    """
    Уровень персонажа вне области определения кривой (level < 1).

    Кривая опыта не определена для уровня 0 и ниже.
    """

    def __init__(self, level: int):
        self.level = level
        super().__init__(f"Level must be >= 1, got {level}")


class InvalidPacingTarget(BalanceError):
    """
    Цель пейсинга с неположительным числом убийств.

    Деление на target_kills <= 0 никогда не выполняется.
    """

    def __init__(self, race_id: str, target_kills: int):
        self.race_id = race_id
        self.target_kills = target_kills
        super().__init__(
            f"Pacing target for '{race_id}' must require at least one kill, "
            f"got target_kills={target_kills}"
        )


class UnknownGrade(BalanceError):
    """Грейд предмета вне фиксированного ординального набора (None..Legendary)."""

    def __init__(self, grade: int, item_id: str = ""):
        self.grade = grade
        self.item_id = item_id
        where = f" on item '{item_id}'" if item_id else ""
        super().__init__(f"Unknown item grade {grade}{where}")


class FloorOutOfRange(BalanceError):
    """Этаж вне диапазона [1, floor_count] подземелья."""

    def __init__(self, dungeon_id: str, floor: int, floor_count: int):
        self.dungeon_id = dungeon_id
        self.floor = floor
        self.floor_count = floor_count
        super().__init__(
            f"Floor {floor} is outside [1, {floor_count}] for dungeon '{dungeon_id}'"
        )


# =============================================================================
# BATCH FAILURE RECORD
# =============================================================================


@dataclass(frozen=True)
class SkippedRecord:
    """Запись, пропущенная пакетной операцией из-за BalanceError."""

    record_id: str
    record_kind: str  # "race" | "dungeon" | "item" | "pacing_target"
    error_type: str
    reason: str

    @classmethod
    def from_error(cls, record_id: str, record_kind: str, error: BalanceError) -> "SkippedRecord":
        return cls(
            record_id=record_id,
            record_kind=record_kind,
            error_type=type(error).__name__,
            reason=str(error),
        )
