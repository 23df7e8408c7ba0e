from vortex_modlist.snapshot.json_repair import repair_duplicate_keys
from vortex_modlist.snapshot.loader import SnapshotLoader, find_latest_snapshot, parse_snapshot_text

__all__ = [
    "SnapshotLoader",
    "find_latest_snapshot",
    "parse_snapshot_text",
    "repair_duplicate_keys",
]
