"""Exit 0 when the live database matches the models, 1 on drift, 2 on error."""

from __future__ import annotations

import sys

from luckydraw.db.engine import make_engine
from luckydraw.db.migrations import describe_operations, schema_differences


def main() -> int:
    engine = make_engine()
    url_display = engine.url.render_as_string(hide_password=True)
    try:
        pending = schema_differences(engine)
    except Exception as exc:
        print(f"Schema drift check: ERROR for {url_display}: {exc}", file=sys.stderr)
        return 2

    if not pending:
        print(f"Schema drift check: OK for {url_display}.")
        return 0
    print(f"Schema drift check: FAILED for {url_display}.")
    for line in describe_operations(pending):
        print(line)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
