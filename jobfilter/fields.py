"""Field name normalization and field kind hints."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

# Lower-case alias -> canonical record key.
DEFAULT_FIELD_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "name": "Name",
        "user": "User",
        "state": "State",
        "partition": "Partition",
        "status": "State",
        "node": "NodeList",
        "nodes": "NodeList",
        "time": "TimeUsed",
        "timelimit": "TimeLimit",
        "cpu": "CPUs",
        "cpus": "CPUs",
        "mem": "Memory",
        "memory": "Memory",
        "account": "Account",
        "qos": "QoS",
        "priority": "Priority",
    }
)

MEMORY_FIELDS = frozenset(["memory", "mem", "realmemory", "allocmem"])
DURATION_FIELDS = frozenset(["time", "timelimit", "timeused", "elapsed", "runtime", "walltime"])
DATE_FIELD_MARKERS = ("submittime", "starttime", "endtime", "created", "modified", "lastupdate")


def normalize_field(field: str, aliases: Mapping[str, str] = DEFAULT_FIELD_ALIASES) -> str:
    """
    Map a user-typed field name to the record key it refers to.

    Known aliases are matched case-insensitively. Anything else is lower-cased
    and gets an upper-case first letter, so ``submittime`` becomes
    ``Submittime`` (not ``SubmitTime``); add an alias for such keys.
    """
    field = field.lower()
    canonical = aliases.get(field)
    if canonical is not None:
        return canonical
    return field[:1].upper() + field[1:]


def is_memory_field(field: str) -> bool:
    return field.lower() in MEMORY_FIELDS


def is_duration_field(field: str) -> bool:
    return field.lower() in DURATION_FIELDS


def is_date_field(field: str) -> bool:
    """True if the field name looks like a timestamp (``SubmitTime``, ``created_at``...)."""
    lowered = field.lower()
    return any(marker in lowered for marker in DATE_FIELD_MARKERS)
