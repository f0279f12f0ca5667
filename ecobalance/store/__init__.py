"""JSON file adapter standing in for the external content store."""

from .json_store import (
    dump_snapshot,
    load_profile,
    load_snapshot,
    parse_profile,
    parse_snapshot,
)

__all__ = [
    "dump_snapshot",
    "load_profile",
    "load_snapshot",
    "parse_profile",
    "parse_snapshot",
]
