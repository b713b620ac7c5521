#!/usr/bin/env python3
"""Write or check docs/exit_codes.md against anybase.errors.EXIT_CODES.

    python scripts/gen_exit_codes_md.py            # rewrite the doc
    python scripts/gen_exit_codes_md.py --check    # exit 1 if the doc is stale
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO = Path(__file__).resolve().parents[1]
DEFAULT_DOC = REPO / "docs" / "exit_codes.md"


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    p.add_argument("--output", type=Path, default=DEFAULT_DOC, help="Doc path (default: docs/exit_codes.md)")
    p.add_argument("--check", action="store_true", help="Compare only; exit 1 when the doc differs")
    ns = p.parse_args(argv)

    sys.path.insert(0, str(REPO / "src"))
    from anybase.errors import render_exit_codes_markdown  # noqa: E402

    expected = render_exit_codes_markdown()
    doc: Path = ns.output

    if ns.check:
        current = doc.read_text(encoding="utf-8") if doc.is_file() else None
        if current != expected:
            print(f"[anybase] {doc} is stale: run scripts/gen_exit_codes_md.py", file=sys.stderr)
            return 1
        print(f"[anybase] {doc} is up to date")
        return 0

    doc.parent.mkdir(parents=True, exist_ok=True)
    doc.write_text(expected, encoding="utf-8")
    print(f"[anybase] wrote {doc}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
