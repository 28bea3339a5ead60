# src/core/errors.py
#!/usr/bin/env python3


class InvalidRequest(ValueError):
    """Search was asked for before both endpoints were placed on the grid."""


class UnsupportedAlgorithmWarning(UserWarning):
    """Unknown algorithm identifier; the engine falls back to A*."""
