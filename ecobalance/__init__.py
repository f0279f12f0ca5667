"""
ecobalance — движок балансировки игровой экономики.

Держит согласованными четыре семейства контента: кривую прокачки, награды
монстров, награды подземелий и цены предметов. Работает в обе стороны:
forward (отчёт и верификация по текущим данным) и inverse (решение базовых
наград по целям пейсинга с записью обратно в записи).
"""

from ecobalance.balance import (
    build_economy_report,
    build_report,
    reprice_items,
    solve_and_apply_pacing,
)

__all__ = [
    "build_economy_report",
    "build_report",
    "reprice_items",
    "solve_and_apply_pacing",
]
