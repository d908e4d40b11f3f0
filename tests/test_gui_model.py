from pathlib import Path

import pytest
import yaml

from et_monitor.gui.model import FILTER_FIELDS, METRIC_CARDS, initial_filter_values, save_filter_choice
from et_monitor.io import FilterConfig, load_dashboard_config
from et_monitor.telemetry import MetricSummary


def test_initial_filter_values_ignore_unknown_options():
    values = initial_filter_values(FilterConfig(crop="Rice", soil_type="Gravel"))
    assert values["crop"] == "Rice"
    # Unknown option falls back to the combo default
    assert values["soil_type"] is None
    assert set(values) == {entry.key for entry in FILTER_FIELDS}


def test_metric_cards_cover_summary_fields():
    keys = {card.key for card in METRIC_CARDS}
    assert keys == set(MetricSummary().formatted())


def test_save_filter_choice_writes_given_settings_file(tmp_path: Path, monkeypatch):
    settings_file = tmp_path / "custom.yml"
    settings_file.write_text(yaml.safe_dump({"filters": {"crop": "Wheat", "slope": "Flat"}}))
    # A relative default would resolve here; it must stay untouched
    monkeypatch.setattr("et_monitor.io.settings.find_project_root", lambda: tmp_path / "elsewhere")

    assert save_filter_choice("slope", "Steep", settings_file) == settings_file

    filters = load_dashboard_config(settings_file).filters
    assert filters.slope == "Steep"
    assert filters.crop == "Wheat"
    assert not (tmp_path / "elsewhere").exists()


def test_save_filter_choice_rejects_unknown_values(tmp_path: Path):
    settings_file = tmp_path / "dashboard.yml"
    settings_file.write_text(yaml.safe_dump({"filters": {"crop": "Wheat"}}))

    with pytest.raises(KeyError):
        save_filter_choice("irrigation", "Drip", settings_file)
    with pytest.raises(ValueError):
        save_filter_choice("crop", "Barley", settings_file)
    assert yaml.safe_load(settings_file.read_text()) == {"filters": {"crop": "Wheat"}}
