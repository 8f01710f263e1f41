"""Runtime package.

Keep this module dependency-light: importing `figbridge.runtime.*` in tests
must not open any connection.
"""

__all__: list[str] = []
