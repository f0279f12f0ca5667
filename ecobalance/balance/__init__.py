"""Balance — решатель наград, ценообразование, награды подземелий и отчёт.

Компоненты:
- reward_solver: цели пейсинга → базовые награды рас (и forward-проверка)
- price_model: цена предмета по грейду, пакетный пересчёт, статистика
- dungeon_rewards: награды по этажам и бонус прохождения
- economy_report: сводный отчёт и верификация
- rendering: текстовые таблицы и JSON-форма отчёта
"""

from .dungeon_rewards import (
    FloorReward,
    completion_reward,
    floor_reward_table,
    full_clear_reward,
    reward_at_floor,
)
from .economy_report import (
    BalanceFinding,
    EconomyReport,
    FindingSeverity,
    build_report,
)
from .price_model import (
    GradePriceStats,
    RepriceBatchResult,
    RepriceOutcome,
    grade_multiplier,
    grade_price_stats,
    price_for_item,
    reprice_item,
    reprice_items,
)
from .rendering import build_economy_report, render_report, report_to_dict
from .reward_solver import (
    PacingApplication,
    PacingBatchResult,
    PacingCheck,
    RewardSolution,
    apply_solution,
    kills_to_level,
    solve_and_apply_pacing,
    solve_base_reward,
    verify_pacing,
)

__all__ = [
    "FloorReward",
    "completion_reward",
    "floor_reward_table",
    "full_clear_reward",
    "reward_at_floor",
    "BalanceFinding",
    "EconomyReport",
    "FindingSeverity",
    "build_report",
    "GradePriceStats",
    "RepriceBatchResult",
    "RepriceOutcome",
    "grade_multiplier",
    "grade_price_stats",
    "price_for_item",
    "reprice_item",
    "reprice_items",
    "build_economy_report",
    "render_report",
    "report_to_dict",
    "PacingApplication",
    "PacingBatchResult",
    "PacingCheck",
    "RewardSolution",
    "apply_solution",
    "kills_to_level",
    "solve_and_apply_pacing",
    "solve_base_reward",
    "verify_pacing",
]
