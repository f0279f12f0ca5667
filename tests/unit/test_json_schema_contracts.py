"""
Tests for JSON Schema Contract Validators and the JSON store

Проверяет:
- Валидность самих схем
- Валидацию правильных данных
- Детекцию нарушений required полей, типов и constraints
- Загрузку снапшота и профиля из файлов (JSON Schema → Pydantic)
"""

import json

import pytest
from jsonschema import Draft202012Validator, ValidationError

from ecobalance.core.contracts import (
    BalanceProfileValidator,
    ContentSnapshotValidator,
    SchemaLoader,
    validate_balance_profile,
    validate_content_snapshot,
)
from ecobalance.core.domain import ItemGrade, ItemKind
from ecobalance.store import (
    dump_snapshot,
    load_profile,
    load_snapshot,
    parse_profile,
    parse_snapshot,
)


@pytest.fixture
def snapshot_data():
    return {
        "races": [
            {"race_id": "Goblin_Race", "base_experience": 4, "base_gold": 5},
            {"race_id": "Dragon_Race"},
        ],
        "dungeons": [{"dungeon_id": "crypt", "floor_count": 12}],
        "items": [
            {"item_id": "iron_sword", "grade": 1, "weapon_max_damage": 12, "sell_price": 120},
            {"item_id": "potion", "grade": 1, "kind": "consumable", "sell_price": 20},
            {"item_id": "letter", "grade": 0, "kind": "quest", "tradeable": False},
        ],
    }


# =============================================================================
# ТЕСТЫ: схемы
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем."""

    def test_schemas_are_valid(self):
        loader = SchemaLoader()
        for name in ("content_snapshot", "balance_profile"):
            Draft202012Validator.check_schema(loader.load_schema(name))

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("content_snapshot") is loader.load_schema("content_snapshot")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "nowhere")

    def test_invalid_schema_file(self, tmp_path):
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# ТЕСТЫ: content_snapshot.json
# =============================================================================


class TestContentSnapshotContract:
    """Тесты контракта снапшота."""

    def test_valid(self, snapshot_data):
        validate_content_snapshot(snapshot_data)
        assert ContentSnapshotValidator().is_valid(snapshot_data)

    def test_empty_object_valid(self):
        validate_content_snapshot({})

    def test_unknown_top_level_field(self, snapshot_data):
        snapshot_data["quests"] = []
        with pytest.raises(ValidationError):
            validate_content_snapshot(snapshot_data)

    def test_race_requires_id(self, snapshot_data):
        snapshot_data["races"].append({"base_experience": 3})
        with pytest.raises(ValidationError) as exc_info:
            validate_content_snapshot(snapshot_data)
        assert "race_id" in exc_info.value.message

    def test_negative_gold(self, snapshot_data):
        snapshot_data["races"][0]["base_gold"] = -1
        with pytest.raises(ValidationError) as exc_info:
            validate_content_snapshot(snapshot_data)
        assert list(exc_info.value.absolute_path) == ["races", 0, "base_gold"]

    def test_flat_dungeon_multiplier(self, snapshot_data):
        snapshot_data["dungeons"][0]["exp_multiplier_per_floor"] = 1.0
        assert not ContentSnapshotValidator().is_valid(snapshot_data)

    def test_unknown_item_kind(self, snapshot_data):
        snapshot_data["items"][0]["kind"] = "weapon"
        errors = list(ContentSnapshotValidator().iter_errors(snapshot_data))
        assert len(errors) == 1
        assert list(errors[0].absolute_path) == ["items", 0, "kind"]

    def test_null_damage_allowed(self, snapshot_data):
        snapshot_data["items"][1]["weapon_max_damage"] = None
        validate_content_snapshot(snapshot_data)

    def test_grade_must_be_integer(self, snapshot_data):
        snapshot_data["items"][0]["grade"] = "RARE"
        with pytest.raises(ValidationError):
            validate_content_snapshot(snapshot_data)

    def test_unknown_grade_ordinal_passes_schema(self, snapshot_data):
        """Схема не ограничивает ординал: UnknownGrade — ошибка ценообразования."""
        snapshot_data["items"][0]["grade"] = 9
        validate_content_snapshot(snapshot_data)


# =============================================================================
# ТЕСТЫ: balance_profile.json
# =============================================================================


class TestBalanceProfileContract:
    """Тесты контракта профиля."""

    def test_empty_profile_valid(self):
        validate_balance_profile({})

    def test_partial_profile_valid(self):
        validate_balance_profile({"exp_curve_exponent": 2.0, "report_levels": [1, 30]})
        assert BalanceProfileValidator().is_valid({"pacing_tolerance_kills": 0})

    def test_unknown_field(self):
        with pytest.raises(ValidationError):
            validate_balance_profile({"exp_base": 100})

    def test_growth_rate_above_one(self):
        with pytest.raises(ValidationError):
            validate_balance_profile({"enhance_growth_rate": 1.0})

    def test_grade_table_complete(self):
        with pytest.raises(ValidationError):
            validate_balance_profile({"grade_multipliers": {"COMMON": 1.0}})

    def test_report_levels_pair(self):
        with pytest.raises(ValidationError):
            validate_balance_profile({"report_levels": [1, 5, 10]})

    def test_pacing_target_fields(self):
        with pytest.raises(ValidationError):
            validate_balance_profile({"pacing_targets": [{"race_id": "Goblin", "target_level": 1}]})


# =============================================================================
# ТЕСТЫ: JSON store
# =============================================================================


class TestJsonStore:
    """Тесты файлового адаптера."""

    def test_parse_snapshot(self, snapshot_data):
        snapshot = parse_snapshot(snapshot_data)
        assert [r.race_id for r in snapshot.races] == ["Goblin_Race", "Dragon_Race"]
        assert snapshot.races[1].base_experience == 0
        assert snapshot.dungeons[0].floor_count == 12
        assert snapshot.dungeons[0].base_experience_reward == 1000
        assert snapshot.items[1].kind == ItemKind.CONSUMABLE
        assert snapshot.items[2].tradeable is False

    def test_parse_snapshot_schema_error(self, snapshot_data):
        snapshot_data["items"][0]["sell_price"] = 1.5
        with pytest.raises(ValidationError):
            parse_snapshot(snapshot_data)

    def test_load_and_dump_snapshot(self, tmp_path, snapshot_data):
        source = tmp_path / "content.json"
        source.write_text(json.dumps(snapshot_data), encoding="utf-8")

        snapshot = load_snapshot(source)
        snapshot.items[0].sell_price = 360
        target = tmp_path / "out.json"
        dump_snapshot(snapshot, target)

        written = json.loads(target.read_text(encoding="utf-8"))
        assert written["items"][0]["sell_price"] == 360
        assert written["items"][1]["kind"] == "consumable"
        validate_content_snapshot(written)
        assert load_snapshot(target).items[0].grade == ItemGrade.COMMON

    def test_parse_profile(self):
        profile = parse_profile(
            {
                "exp_curve_exponent": 2.0,
                "report_levels": [1, 30],
                "pacing_targets": [{"race_id": "Slime", "target_level": 2, "target_kills": 10}],
            }
        )
        assert profile.exp_curve_exponent == 2.0
        assert profile.report_levels == (1, 30)
        assert profile.pacing_targets[0].race_id == "Slime"
        # Остальные поля по умолчанию
        assert profile.enhance_max_tier == 9

    def test_load_profile(self, tmp_path):
        path = tmp_path / "hard.json"
        path.write_text(json.dumps({"pacing_tolerance_kills": 2}), encoding="utf-8")
        assert load_profile(path).pacing_tolerance_kills == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_snapshot(tmp_path / "missing.json")
