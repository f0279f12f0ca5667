"""
Rendering — текстовая и структурированная формы EconomyReport

Текстовая форма печатает секции отчёта таблицами в порядке секций,
структурированная форма пригодна для json.dumps.
"""

from dataclasses import asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ecobalance.balance.economy_report import EconomyReport, build_report
from ecobalance.core.domain.dungeon import DungeonRecord
from ecobalance.core.domain.items import ItemRecord
from ecobalance.core.domain.monster_race import MonsterRaceRecord
from ecobalance.core.domain.profile import DEFAULT_PROFILE, BalanceProfile


def _heading(lines: List[str], title: str) -> None:
    lines.append("")
    lines.append(f"--- {title} ---")


def render_report(report: EconomyReport) -> str:
    """Все секции отчёта текстовыми таблицами, в порядке секций."""
    lines: List[str] = ["=== Balance Table ==="]

    _heading(lines, "Experience by level")
    lines.append(f"{'Lv':>4} | {'EXP':>8} | {'Cumulative':>10} | {'HP':>6} | {'MP':>5}")
    for p in report.leveling:
        lines.append(
            f"Lv{p.level:>2} | {p.experience_required:>8} | {p.cumulative_experience:>10} | "
            f"{p.reference_hp:>6.0f} | {p.reference_mp:>5.0f}"
        )

    _heading(lines, "Monster race rewards")
    kill_cols = ""
    if report.race_rewards:
        kill_cols = " | ".join(
            f"Kills Lv{lv:>2}" for lv, _ in report.race_rewards[0].kills_at_levels
        )
    lines.append(f"{'Race':<25} | {'Base EXP':>8} | {'Base Gold':>9} | {kill_cols}")
    for row in report.race_rewards:
        kills = " | ".join(f"{k:>10}" for _, k in row.kills_at_levels)
        lines.append(
            f"{row.race_id:<25} | {row.base_experience:>8} | {row.base_gold:>9} | {kills}"
        )

    _heading(lines, "Dungeon rewards")
    lines.append(
        f"{'Dungeon':<25} | {'Base EXP':>8} | {'Base Gold':>9} | "
        f"{'Floor EXP':>9} | {'Floor Gold':>10} | Bonus"
    )
    for row in report.dungeon_rewards:
        lines.append(
            f"{row.dungeon_id:<25} | {row.base_experience:>8} | {row.base_gold:>9} | "
            f"{row.floor_experience:>9} | {row.floor_gold:>10} | "
            f"x{row.completion_bonus_multiplier:.1f} (F{row.reference_floor})"
        )

    _heading(lines, "Item prices by grade")
    lines.append(f"{'Grade':<12} | {'Count':>5} | {'Mean price':>10}")
    for stats in report.item_prices.grades:
        lines.append(f"{stats.grade.name.title():<12} | {stats.count:>5} | {stats.mean_price:>10}")
    lines.append(f"Total items: {report.item_prices.total_items}")

    cross = report.cross_check
    _heading(lines, "Kills to level up")
    lines.append(f"{'Lv':>4} | {'EXP':>7} | " + " | ".join(f"{name:>9}" for name in cross.races))
    for row in cross.kills_by_level:
        kills = " | ".join(f"{k:>9}" for _, k in row.kills)
        lines.append(f"Lv{row.level:>2} | {row.experience_required:>7} | {kills}")

    _heading(lines, "Gold income vs gear cost")
    gear = cross.gear_cost
    lines.append(f"Common gear mean price: {gear.common_mean_price:,} Gold")
    lines.append(f"Rare gear mean price: {gear.rare_mean_price:,} Gold")
    if gear.gold_per_kill > 0:
        lines.append(f"{gear.reference_race} gold per kill: {gear.gold_per_kill}")
        lines.append(f"Kills to afford Common gear: {gear.kills_for_common}")
        lines.append(f"Kills to afford Rare gear: {gear.kills_for_rare}")
    else:
        lines.append(f"{gear.reference_race} gives no gold; affordability not computed")

    _heading(lines, "Enhancement cost (cumulative)")
    for step in cross.enhancement:
        lines.append(
            f"+{step.tier}->+{step.tier + 1}: {step.cost:,} Gold "
            f"(cumulative: {step.cumulative_cost:,})"
        )

    _heading(lines, "Verification")
    if report.findings:
        for f in report.findings:
            lines.append(f"[{f.severity.value}] {f.code} {f.subject}: {f.details}")
    lines.append(f"Result: {'PASS' if report.passed else 'FAIL'}")

    if report.failures:
        _heading(lines, "Skipped records")
        for s in report.failures:
            lines.append(f"{s.record_kind} {s.record_id}: {s.error_type}: {s.reason}")

    return "\n".join(lines)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.name if isinstance(value, int) else value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if hasattr(value, "model_dump"):
        return _jsonable(value.model_dump())
    return value


def report_to_dict(report: EconomyReport) -> Dict[str, Any]:
    """Структурированная (JSON-сериализуемая) форма отчёта."""
    data = _jsonable(asdict(report))
    data["cross_check"]["enhancement"] = [
        step._asdict() for step in report.cross_check.enhancement
    ]
    data["passed"] = report.passed
    return data


def build_economy_report(
    level_range: Optional[Tuple[int, int]],
    races: Sequence[MonsterRaceRecord],
    dungeons: Sequence[DungeonRecord],
    items: Sequence[ItemRecord],
    profile: BalanceProfile = DEFAULT_PROFILE,
) -> str:
    """Построение отчёта и его текстовая форма одним вызовом."""
    return render_report(build_report(level_range, races, dungeons, items, profile))
