from __future__ import annotations

import pytest

from jobfilter.fields import (
    DEFAULT_FIELD_ALIASES,
    is_date_field,
    is_duration_field,
    is_memory_field,
    normalize_field,
)


@pytest.mark.parametrize(
    ("alias", "canonical"),
    [
        ("name", "Name"),
        ("user", "User"),
        ("state", "State"),
        ("partition", "Partition"),
        ("status", "State"),
        ("node", "NodeList"),
        ("nodes", "NodeList"),
        ("time", "TimeUsed"),
        ("timelimit", "TimeLimit"),
        ("cpu", "CPUs"),
        ("cpus", "CPUs"),
        ("mem", "Memory"),
        ("memory", "Memory"),
        ("account", "Account"),
        ("qos", "QoS"),
        ("priority", "Priority"),
    ],
)
def test_default_aliases(alias: str, canonical: str) -> None:
    assert normalize_field(alias) == canonical
    assert normalize_field(alias.upper()) == canonical


def test_alias_table_size() -> None:
    assert len(DEFAULT_FIELD_ALIASES) == 16


def test_unknown_field_capitalized() -> None:
    assert normalize_field("features") == "Features"
    assert normalize_field("SubmitTime") == "Submittime"
    assert normalize_field("") == ""


def test_custom_alias_table() -> None:
    assert normalize_field("gpus", {"gpus": "GRES"}) == "GRES"
    assert normalize_field("state", {"gpus": "GRES"}) == "State"


def test_field_kind_hints() -> None:
    assert is_memory_field("RealMemory")
    assert not is_memory_field("cpus")
    assert is_duration_field("TimeLimit")
    assert is_date_field("SubmitTime")
    assert is_date_field("created_at")
    assert not is_date_field("State")
