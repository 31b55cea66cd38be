"""``python -m sparkmail`` behaves exactly like the ``sparkmail`` script."""

from __future__ import annotations

from .entry import main

if __name__ == "__main__":
    raise SystemExit(main())
