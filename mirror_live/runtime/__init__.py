"""Runtime package.

Keep this module dependency-light: importing `mirror_live.runtime.*` in unit
tests should not open sockets or spawn recorders.
"""

__all__: list[str] = []
