"""Read-only mod-list reporting for Vortex state snapshots."""

__version__ = "0.1.0"
