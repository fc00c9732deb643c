from __future__ import annotations

from capital_path.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
