"""Entry point for ``python -m vortex_modlist``."""

from vortex_modlist.cli import main

if __name__ == "__main__":
    main()
