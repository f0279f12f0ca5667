"""
Contract Validation Module

Валидация JSON входов (снапшот контента, профиль баланса) по JSON Schema.
"""

from .validators import (
    BalanceProfileValidator,
    ContentSnapshotValidator,
    ContractValidator,
    SchemaLoader,
    validate_balance_profile,
    validate_content_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ContentSnapshotValidator",
    "BalanceProfileValidator",
    # Functions
    "validate_content_snapshot",
    "validate_balance_profile",
]
