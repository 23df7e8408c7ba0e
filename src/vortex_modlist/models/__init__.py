from vortex_modlist.models.records import (
    AggregateModRecord,
    ModRecord,
    RawModRecord,
    ResolvedModRecord,
)

__all__ = [
    "AggregateModRecord",
    "ModRecord",
    "RawModRecord",
    "ResolvedModRecord",
]
