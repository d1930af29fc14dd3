#!/usr/bin/env python3
"""Tests for validate_store collection file validation."""

from fleetdesk.seed import ensure_seeded
from fleetdesk.store import YamlStore
from validate_store import main, validate_collection, validate_store


def seed(path):
    ensure_seeded(YamlStore(path))
    return path


class TestValidateCollection:
    """Tests for validate_collection function."""

    def test_seeded_collections_are_valid(self, tmp_path):
        store = YamlStore(seed(tmp_path))
        for key in ("vehicles", "rentals", "maintenance", "expenditures"):
            assert validate_collection(store, key) == []

    def test_missing_required_field(self, tmp_path):
        (tmp_path / "vehicles.yaml").write_text("""
- id: v-1
  model: Corolla
  year: 2020
  licensePlate: GR 1234-20
  fuelType: Petrol
  dateAdded: '2024-01-01T00:00:00.000Z'
  lastUpdated: '2024-01-01T00:00:00.000Z'
""")
        errors = validate_collection(YamlStore(tmp_path), "vehicles")
        assert errors == ["v-1 make: Make is required"]

    def test_missing_stored_fields(self, tmp_path):
        (tmp_path / "expenditures.yaml").write_text("""
- description: Fuel
  date: '2024-05-10'
  amount: 200
""")
        errors = validate_collection(YamlStore(tmp_path), "expenditures")
        assert "[0] id: Id is required" in errors
        assert "[0] category: Category is required" in errors
        assert "[0] payment_method: Payment method is required" in errors

    def test_unquoted_dates_are_accepted(self, tmp_path):
        (tmp_path / "expenditures.yaml").write_text("""
- id: e-1
  category: fuel
  description: Fuel
  date: 2024-05-10
  amount: 200
  paymentMethod: cash
  dateCreated: 2024-05-10
  lastUpdated: 2024-05-10
""")
        assert validate_collection(YamlStore(tmp_path), "expenditures") == []

    def test_duplicate_ids(self, tmp_path):
        (tmp_path / "expenditures.yaml").write_text("""
- {id: e-1, category: fuel, description: Fuel, date: '2024-05-10', amount: 200,
   paymentMethod: cash, dateCreated: '2024-05-10', lastUpdated: '2024-05-10'}
- {id: e-1, category: tax, description: Tax, date: '2024-05-11', amount: 50,
   paymentMethod: card, dateCreated: '2024-05-11', lastUpdated: '2024-05-11'}
""")
        errors = validate_collection(YamlStore(tmp_path), "expenditures")
        assert errors == ["e-1 id: Duplicate id"]

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / "rentals.yaml").write_text("- customerName: [unclosed\n")
        errors = validate_collection(YamlStore(tmp_path), "rentals")
        assert len(errors) == 1
        assert errors[0].startswith("Storage error")

    def test_item_not_a_mapping(self, tmp_path):
        (tmp_path / "rentals.yaml").write_text("- just a string\n")
        errors = validate_collection(YamlStore(tmp_path), "rentals")
        assert errors[0].startswith("[0] Could not parse record")


class TestValidateStore:
    def test_only_present_files(self, tmp_path):
        YamlStore(tmp_path).write("vehicles", [])
        assert validate_store(tmp_path) == {"vehicles.yaml": []}


class TestMain:
    """Tests for main function."""

    def test_valid_store(self, tmp_path, capsys):
        seed(tmp_path)
        capsys.readouterr()
        assert main([str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert "OK: vehicles.yaml" in out
        assert "OK: expenditures.yaml" in out

    def test_invalid_store(self, tmp_path, capsys):
        (tmp_path / "vehicles.yaml").write_text("- {id: v-1}\n")
        assert main([str(tmp_path)]) == 1
        assert "FAIL: vehicles.yaml" in capsys.readouterr().out

    def test_missing_dir(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope")]) == 1
        assert "not found" in capsys.readouterr().out

    def test_empty_dir(self, tmp_path, capsys):
        assert main([str(tmp_path)]) == 0
        assert "No collection files" in capsys.readouterr().out
