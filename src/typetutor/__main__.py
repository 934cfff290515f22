"""Module entrypoint for `python -m typetutor`."""

from __future__ import annotations

from typetutor.cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
