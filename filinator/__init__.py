"""Public package surface for filinator.

Exports ``main`` for programmatic CLI invocation and the walker entry point
``run``. Most implementation lives in submodules under ``filinator``.
"""

from __future__ import annotations

__version__ = "0.1.0"


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def run(*args, **kwargs):
    """Transform the contents of a directory; see ``filinator.walker.run``."""
    from .walker import run as _run

    return _run(*args, **kwargs)


__all__ = ["main", "run", "__version__"]
