"""
CLI движка баланса: отчёт, решение пейсинга, пересчёт цен

Коды возврата: 0 — успех, 1 — верификация FAIL или ошибка данных.
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

import jsonschema
import pydantic

from ecobalance.balance.economy_report import build_report
from ecobalance.balance.price_model import reprice_items
from ecobalance.balance.rendering import render_report, report_to_dict
from ecobalance.balance.reward_solver import solve_and_apply_pacing
from ecobalance.core.domain.profile import DEFAULT_PROFILE, BalanceProfile
from ecobalance.core.errors import BalanceError
from ecobalance.store.json_store import dump_snapshot, load_profile, load_snapshot


def _load_profile(path: Optional[str]) -> BalanceProfile:
    if path is None:
        return DEFAULT_PROFILE
    return load_profile(path)


def cmd_report(args: argparse.Namespace) -> int:
    """Печать таблицы баланса и верификации; код 1 при FAIL."""
    profile = _load_profile(args.profile)
    snapshot = load_snapshot(args.snapshot)
    level_range = tuple(args.levels) if args.levels else None

    report = build_report(
        level_range,
        snapshot.races,
        snapshot.dungeons,
        snapshot.items,
        profile,
    )

    if args.json:
        print(json.dumps(report_to_dict(report), indent=2, ensure_ascii=False))
    else:
        print(render_report(report))

    return 0 if report.passed else 1


def cmd_solve(args: argparse.Namespace) -> int:
    """Решение целей пейсинга и запись базовых наград в записи рас."""
    profile = _load_profile(args.profile)
    snapshot = load_snapshot(args.snapshot)

    result = solve_and_apply_pacing(snapshot.races, profile.pacing_targets, profile)

    print(f"{'Race':<25} {'EXP':>6} {'Gold':>6}  Target")
    for a in result.applied:
        print(
            f"{a.race_id:<25} {a.new_experience:>6} {a.new_gold:>6}  "
            f"Lv{a.target.target_level} in {a.target.target_kills} kills"
        )
    if result.unmatched_targets:
        print(f"\nTargets without a race record: {', '.join(result.unmatched_targets)}")
    for f in result.failures:
        print(f"Skipped {f.record_id}: {f.reason}", file=sys.stderr)

    if args.write:
        dump_snapshot(snapshot, args.write)
    return 0


def cmd_reprice(args: argparse.Namespace) -> int:
    """Пересчёт цен продажи предметов по множителям грейдов."""
    profile = _load_profile(args.profile)
    snapshot = load_snapshot(args.snapshot)

    result = reprice_items(snapshot.items, profile)

    for r in result.repriced:
        print(f"{r.item_id:<30} {r.grade.name.title():<10} {r.previous_price:>8} -> {r.new_price:>8}")
    print(f"\n{len(result.repriced)} repriced, {result.unchanged} unchanged")
    for f in result.failures:
        print(f"Skipped {f.record_id}: {f.reason}", file=sys.stderr)

    if args.write:
        dump_snapshot(snapshot, args.write)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecobalance",
        description="Game economy balancing: leveling, monster rewards, dungeon rewards, item prices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s report content.json                 # Balance table + verification
  %(prog)s report content.json --levels 1 30 --json
  %(prog)s solve content.json --write content.json
  %(prog)s reprice content.json --profile hard.json --write out.json
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("snapshot", help="Content snapshot JSON file")
        p.add_argument("--profile", "-p", help="Balance profile JSON file")

    p_report = sub.add_parser("report", help="Print balance table and verification")
    add_common(p_report)
    p_report.add_argument(
        "--levels",
        nargs=2,
        type=int,
        metavar=("FIRST", "LAST"),
        help="Level range (default: profile report_levels)",
    )
    p_report.add_argument("--json", action="store_true", help="Output report as JSON")
    p_report.set_defaults(func=cmd_report)

    p_solve = sub.add_parser("solve", help="Solve pacing targets into race rewards")
    add_common(p_solve)
    p_solve.add_argument("--write", "-w", help="Write updated snapshot to this file")
    p_solve.set_defaults(func=cmd_solve)

    p_reprice = sub.add_parser("reprice", help="Recompute item prices by grade")
    add_common(p_reprice)
    p_reprice.add_argument("--write", "-w", help="Write updated snapshot to this file")
    p_reprice.set_defaults(func=cmd_reprice)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Точка входа CLI."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    try:
        return args.func(args)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
    except jsonschema.ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path)
        print(f"Error: invalid input at '{path}': {e.message}", file=sys.stderr)
    except pydantic.ValidationError as e:
        print(f"Error: invalid input: {e}", file=sys.stderr)
    except (BalanceError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
