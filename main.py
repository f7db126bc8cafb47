from __future__ import annotations

from filetools.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
