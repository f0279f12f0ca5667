"""
Тесты для Economy Report — сводный отчёт и верификация

Проверяемые инварианты:
1. Отчёт не мутирует входы и детерминирован
2. Ошибка одной записи → failures, остальные строки на месте
3. passed == нет находок ERROR
4. Текстовая и JSON формы содержат все секции
"""

import json

import pytest

from ecobalance.balance.economy_report import FindingSeverity, build_report
from ecobalance.balance.rendering import build_economy_report, render_report, report_to_dict
from ecobalance.core.domain.dungeon import DungeonRecord
from ecobalance.core.domain.items import ItemGrade, ItemKind, ItemRecord
from ecobalance.core.domain.monster_race import MonsterRaceRecord
from ecobalance.core.domain.profile import BalanceProfile
from ecobalance.core.errors import InvalidLevel


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def races():
    """Расы с наградами, уже решёнными по целям по умолчанию."""
    return [
        MonsterRaceRecord(race_id="Goblin_Race", base_experience=4, base_gold=5),
        MonsterRaceRecord(race_id="Orc_Race", base_experience=18, base_gold=5),
        MonsterRaceRecord(race_id="Undead_Race", base_experience=37, base_gold=9),
        MonsterRaceRecord(race_id="Dragon_Race", base_experience=79, base_gold=19),
    ]


@pytest.fixture
def dungeons():
    return [DungeonRecord(dungeon_id="crypt")]


@pytest.fixture
def items():
    return [
        ItemRecord(item_id="iron_sword", grade=ItemGrade.COMMON, weapon_max_damage=12, sell_price=120),
        ItemRecord(item_id="rune_sword", grade=ItemGrade.RARE, weapon_max_damage=12, sell_price=360),
        ItemRecord(
            item_id="potion", grade=ItemGrade.COMMON, kind=ItemKind.CONSUMABLE, sell_price=20
        ),
        ItemRecord(
            item_id="old_letter",
            grade=ItemGrade.NONE,
            kind=ItemKind.QUEST,
            sell_price=0,
            tradeable=False,
        ),
    ]


@pytest.fixture
def report(races, dungeons, items):
    return build_report((1, 10), races, dungeons, items)


# =============================================================================
# ТЕСТЫ: секции
# =============================================================================


class TestReportSections:
    """Тесты содержимого секций."""

    def test_level_range(self, report):
        assert report.level_range == (1, 10)
        assert [p.level for p in report.leveling] == list(range(1, 11))
        assert report.leveling[-1].experience_required == 3162

    def test_default_level_range_from_profile(self, races, dungeons, items):
        report = build_report(None, races, dungeons, items)
        assert report.level_range == (1, 15)
        assert len(report.leveling) == 15

    def test_race_rows(self, report):
        goblin = report.race_rewards[0]
        assert goblin.race_id == "Goblin_Race"
        assert goblin.base_experience == 4
        assert goblin.kills_at_levels == ((1, 25), (10, 791))

    def test_dungeon_rows(self, report):
        row = report.dungeon_rewards[0]
        assert row.dungeon_id == "crypt"
        assert row.reference_floor == 10
        assert (row.floor_experience, row.floor_gold) == (5159, 1178)
        assert row.completion_bonus_multiplier == 2.0

    def test_item_prices(self, report):
        by_grade = {s.grade: s for s in report.item_prices.grades}
        assert ItemGrade.NONE not in by_grade
        assert by_grade[ItemGrade.COMMON].count == 2
        assert by_grade[ItemGrade.COMMON].mean_price == 70
        assert by_grade[ItemGrade.RARE].mean_price == 360
        assert by_grade[ItemGrade.EPIC].count == 0
        assert report.item_prices.total_items == 4

    def test_kills_by_level(self, report):
        cross = report.cross_check
        assert cross.races == ("Goblin", "Orc", "Undead", "Dragon")
        assert len(cross.kills_by_level) == 10
        lv10 = cross.kills_by_level[-1]
        assert lv10.level == 10
        assert lv10.experience_required == 3162
        assert dict(lv10.kills) == {"Goblin": 791, "Orc": 176, "Undead": 86, "Dragon": 41}

    def test_gear_cost(self, report):
        gear = report.cross_check.gear_cost
        assert gear.reference_race == "Goblin"
        assert gear.gold_per_kill == 5
        assert gear.common_mean_price == 120
        assert gear.rare_mean_price == 360
        assert gear.kills_for_common == 24
        assert gear.kills_for_rare == 72

    def test_enhancement(self, report):
        enhancement = report.cross_check.enhancement
        assert len(enhancement) == 10
        assert enhancement[-1].cumulative_cost == 44502

    def test_pacing_checks(self, report):
        checks = {c.race_id: c for c in report.pacing_checks}
        assert set(checks) == {"Goblin_Race", "Orc_Race", "Undead_Race", "Dragon_Race"}
        assert checks["Goblin_Race"].deviation == 0
        assert checks["Dragon_Race"].actual_kills == 41


# =============================================================================
# ТЕСТЫ: верификация
# =============================================================================


class TestVerification:
    """Тесты находок и pass/fail."""

    def test_balanced_content_passes(self, report):
        assert report.passed is True
        assert not [f for f in report.findings if f.severity == FindingSeverity.ERROR]
        assert report.failures == []

    def test_flat_curve_fails(self, races, dungeons, items):
        profile = BalanceProfile(exp_curve_exponent=0.0)
        report = build_report((1, 5), races, dungeons, items, profile)
        codes = {f.code: f for f in report.findings}
        assert codes["curve_not_increasing"].subject == "Lv2"
        assert report.passed is False

    def test_pacing_out_of_band(self, races, dungeons, items):
        races[0].base_experience = 1
        report = build_report((1, 10), races, dungeons, items)
        finding = next(f for f in report.findings if f.code == "pacing_out_of_band")
        assert finding.subject == "Goblin_Race"
        assert finding.severity == FindingSeverity.ERROR
        assert report.passed is False

    def test_unpriced_tradeable_item(self, races, dungeons, items):
        items.append(ItemRecord(item_id="free_helm", grade=ItemGrade.COMMON))
        report = build_report((1, 10), races, dungeons, items)
        finding = next(f for f in report.findings if f.code == "tradeable_item_unpriced")
        assert finding.subject == "free_helm"
        assert report.passed is False

    def test_non_tradeable_zero_price_ok(self, report):
        assert not any(f.subject == "old_letter" for f in report.findings)

    def test_missing_cross_check_race_is_warning(self, dungeons, items):
        races = [MonsterRaceRecord(race_id="Goblin_Race", base_experience=4, base_gold=5)]
        report = build_report((1, 10), races, dungeons, items)

        missing = [f for f in report.findings if f.code == "cross_check_race_missing"]
        assert {f.subject for f in missing} == {"Orc", "Undead", "Dragon"}
        assert all(f.severity == FindingSeverity.WARNING for f in missing)
        assert dict(report.cross_check.kills_by_level[0].kills)["Dragon"] == 999
        assert report.passed is True

    def test_unmatched_pacing_targets_are_warnings(self, dungeons, items):
        races = [MonsterRaceRecord(race_id="Goblin_Race", base_experience=4, base_gold=5)]
        report = build_report((1, 10), races, dungeons, items)

        unmatched = [f for f in report.findings if f.code == "pacing_target_unmatched"]
        assert {f.subject for f in unmatched} == {
            "Orc",
            "Beast",
            "Undead",
            "Elemental",
            "Demon",
            "Construct",
            "Dragon",
        }
        assert all(f.severity == FindingSeverity.WARNING for f in unmatched)
        assert [c.race_id for c in report.pacing_checks] == ["Goblin_Race"]
        assert report.passed is True

    def test_matched_pacing_targets_not_reported(self, report):
        unmatched = {f.subject for f in report.findings if f.code == "pacing_target_unmatched"}
        assert unmatched == {"Beast", "Elemental", "Demon", "Construct"}

    def test_missing_reference_race(self, dungeons, items):
        races = [MonsterRaceRecord(race_id="Orc_Race", base_experience=18, base_gold=5)]
        report = build_report((1, 10), races, dungeons, items)

        assert any(f.code == "reference_race_missing" for f in report.findings)
        assert report.cross_check.gear_cost.gold_per_kill == 0
        assert report.cross_check.gear_cost.kills_for_common is None


# =============================================================================
# ТЕСТЫ: частичные ошибки
# =============================================================================


class TestPartialFailures:
    """Ошибка одной записи не прерывает отчёт."""

    def test_unknown_grade_item(self, races, dungeons, items):
        items.append(ItemRecord(item_id="mystery", grade=9, sell_price=10))
        report = build_report((1, 10), races, dungeons, items)

        failure = next(f for f in report.failures if f.record_id == "mystery")
        assert failure.error_type == "UnknownGrade"
        assert failure.record_kind == "item"
        assert report.item_prices.grades[0].count == 2

    def test_short_dungeon(self, races, items):
        dungeons = [
            DungeonRecord(dungeon_id="cellar", floor_count=5),
            DungeonRecord(dungeon_id="crypt"),
        ]
        report = build_report((1, 10), races, dungeons, items)

        assert [r.dungeon_id for r in report.dungeon_rewards] == ["crypt"]
        failure = report.failures[0]
        assert failure.record_id == "cellar"
        assert failure.error_type == "FloorOutOfRange"

    def test_invalid_level_range(self, races, dungeons, items):
        with pytest.raises(InvalidLevel):
            build_report((0, 10), races, dungeons, items)
        with pytest.raises(InvalidLevel):
            build_report((10, 5), races, dungeons, items)


class TestPurity:
    """Отчёт чистый и детерминированный."""

    def test_does_not_mutate_inputs(self, races, dungeons, items):
        before = (
            [r.model_dump() for r in races],
            [d.model_dump() for d in dungeons],
            [i.model_dump() for i in items],
        )
        build_report((1, 15), races, dungeons, items)
        after = (
            [r.model_dump() for r in races],
            [d.model_dump() for d in dungeons],
            [i.model_dump() for i in items],
        )
        assert before == after

    def test_deterministic(self, races, dungeons, items):
        first = build_report((1, 15), races, dungeons, items)
        second = build_report((1, 15), races, dungeons, items)
        assert first == second
        assert render_report(first) == render_report(second)


# =============================================================================
# ТЕСТЫ: rendering
# =============================================================================


class TestRendering:
    """Тесты текстовой и JSON формы."""

    def test_text_sections_in_order(self, report):
        text = render_report(report)
        headings = [
            "=== Balance Table ===",
            "--- Experience by level ---",
            "--- Monster race rewards ---",
            "--- Dungeon rewards ---",
            "--- Item prices by grade ---",
            "--- Kills to level up ---",
            "--- Gold income vs gear cost ---",
            "--- Enhancement cost (cumulative) ---",
            "--- Verification ---",
        ]
        positions = [text.index(h) for h in headings]
        assert positions == sorted(positions)
        assert "Result: PASS" in text
        assert "Skipped records" not in text

    def test_text_values(self, report):
        text = render_report(report)
        assert "Goblin_Race" in text
        assert "cumulative: 44,502" in text
        assert "Kills to afford Common gear: 24" in text

    def test_text_failure_section(self, races, items):
        dungeons = [DungeonRecord(dungeon_id="cellar", floor_count=5)]
        text = render_report(build_report((1, 10), races, dungeons, items))
        assert "--- Skipped records ---" in text
        assert "dungeon cellar: FloorOutOfRange" in text

    def test_build_economy_report_text(self, races, dungeons, items):
        text = build_economy_report((1, 10), races, dungeons, items)
        assert text == render_report(build_report((1, 10), races, dungeons, items))

    def test_json_form(self, report):
        data = report_to_dict(report)
        encoded = json.dumps(data)
        decoded = json.loads(encoded)

        assert decoded["passed"] is True
        assert decoded["level_range"] == [1, 10]
        assert decoded["leveling"][0]["experience_required"] == 100
        assert decoded["item_prices"]["grades"][0]["grade"] == "COMMON"
        assert decoded["cross_check"]["enhancement"][-1] == {
            "tier": 9,
            "cost": 19835,
            "cumulative_cost": 44502,
        }
        assert decoded["cross_check"]["gear_cost"]["kills_for_rare"] == 72

    def test_json_findings(self, races, dungeons, items):
        items.append(ItemRecord(item_id="free_helm", grade=ItemGrade.COMMON))
        data = report_to_dict(build_report((1, 10), races, dungeons, items))
        assert data["passed"] is False
        finding = next(f for f in data["findings"] if f["code"] == "tradeable_item_unpriced")
        assert finding["severity"] == "ERROR"
