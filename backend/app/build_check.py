"""Build check — verify the application can be configured and assembled.

Prints "BUILD OK", or "BUILD FAILED: <type> - <message>" plus the traceback
on stderr with exit status 1. Run with `python -m app.build_check`.
"""

import sys
import traceback


def main() -> int:
    try:
        from app.config import get_settings
        from app.main import create_app

        create_app(get_settings())
    except Exception as e:
        print(f"BUILD FAILED: {type(e).__name__} - {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        return 1
    print("BUILD OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
