from typing import TypedDict

NO_NAME_PLACEHOLDER = "[Unnamed entry - Vortex has no mod name]"
NO_VERSION_PLACEHOLDER = "[no version in Vortex]"
TOOL_ENTRY_TEMPLATE = "[Tool entry - {mod_type}]"

ARCHIVE_EXTENSIONS = (".zip", ".rar", ".7z", ".7zip")


class CatalogRegistryEntry(TypedDict):
    domain: str
    host: str


# Mod-hosting sources whose download pages follow /<game-slug>/mods/<id>/
CATALOG_REGISTRY: dict[str, CatalogRegistryEntry] = {
    "nexus": {
        "domain": "nexusmods.com",
        "host": "www.nexusmods.com",
    },
}
