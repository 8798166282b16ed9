"""Tests for filter presets."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from jobfilter.exceptions import ConfigError
from jobfilter.operators import FilterOperator
from jobfilter.presets import (
    DEFAULT_PRESETS,
    FilterPreset,
    find_preset,
    load_presets,
    presets_for,
)


class TestDefaultPresets:
    @pytest.mark.parametrize("preset", DEFAULT_PRESETS, ids=lambda p: p.name)
    def test_every_default_preset_parses(self, preset: FilterPreset) -> None:
        flt = preset.to_filter(expand_env=False)
        assert not flt.is_empty
        assert flt.name == preset.name

    def test_counts_per_view(self) -> None:
        views = [p.view_type for p in DEFAULT_PRESETS]
        assert views.count("jobs") == 8
        assert views.count("nodes") == 7
        assert views.count("all") == 2

    def test_presets_for_view_appends_global(self) -> None:
        names = [p.name for p in presets_for("jobs")]
        assert names[0] == "My Jobs"
        assert names[-2:] == ["Production", "Development"]
        assert "Available Nodes" not in names

    def test_presets_for_all_is_global_only(self) -> None:
        assert [p.name for p in presets_for("all")] == ["Production", "Development"]

    def test_find_preset_ignores_case(self) -> None:
        preset = find_preset("running jobs")
        assert preset is not None
        assert preset.filter_str == "state=RUNNING"

    def test_find_preset_respects_view(self) -> None:
        assert find_preset("GPU Nodes", "jobs") is None
        assert find_preset("GPU Nodes", "nodes") is not None
        assert find_preset("Production", "nodes") is not None
        assert find_preset("nope") is None


class TestFilterPreset:
    def test_my_jobs_expands_user(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("USER", "alice")
        preset = find_preset("My Jobs")
        assert preset is not None
        flt = preset.to_filter()
        assert flt.expressions[0].value == "alice"
        assert flt.evaluate({"User": "alice"})

    def test_without_expansion_keeps_reference(self) -> None:
        preset = FilterPreset(name="Mine", filter_str="user=$USER", view_type="jobs")
        assert preset.to_filter(expand_env=False).expressions[0].value == "$USER"

    def test_missing_view_is_global(self) -> None:
        preset = FilterPreset(name="Everywhere", filter_str="state=x", view_type="")
        assert preset.view_type == "all"
        assert preset.is_global

    def test_name_required(self) -> None:
        with pytest.raises(ValidationError):
            FilterPreset(name="", filter_str="state=x")

    def test_node_preset_uses_in_list(self) -> None:
        preset = find_preset("Down Nodes", "nodes")
        assert preset is not None
        expr = preset.to_filter().expressions[0]
        assert expr.operator is FilterOperator.IN
        assert expr.value == ("DOWN", "DRAIN", "DRAINING")


class TestLoadPresets:
    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "presets.json"
        path.write_text(
            json.dumps(
                [
                    {"name": "Big", "filter_str": "cpus>64", "view_type": "jobs"},
                    {"name": "Any", "filter_str": "state=idle"},
                ]
            ),
            encoding="utf-8",
        )
        presets = load_presets(path)
        assert [p.name for p in presets] == ["Big", "Any"]
        assert presets[1].is_global

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "presets.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_presets(path)

    def test_invalid_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "presets.json"
        path.write_text(json.dumps([{"name": "NoFilter"}]), encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid presets"):
            load_presets(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_presets(tmp_path / "missing.json")
