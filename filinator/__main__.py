"""Module entrypoint for ``python -m filinator``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing happens in ``filinator.cli``.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
