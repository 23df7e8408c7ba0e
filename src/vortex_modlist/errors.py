"""Failures that abort a mod-list run.

Missing homepages, versions or profile state are not errors; they are
filled by fallbacks inside the pipeline.
"""


class SnapshotError(Exception):
    """Base class for unrecoverable snapshot problems."""


class NotFoundError(SnapshotError):
    """No snapshot file exists where Vortex writes them."""


class ParseError(SnapshotError):
    """Snapshot text is not valid JSON, even after duplicate-key repair."""


class SchemaError(SnapshotError):
    """Snapshot parsed but lacks the structure the extractor needs."""
