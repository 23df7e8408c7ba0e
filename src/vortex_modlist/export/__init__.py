from vortex_modlist.export.writers import (
    ExportFormat,
    record_to_dict,
    render_csv,
    render_json,
    write_export,
)

__all__ = [
    "ExportFormat",
    "record_to_dict",
    "render_csv",
    "render_json",
    "write_export",
]
