import sys
from typing import List, Optional

from .engine import DiagnosticEngine


def run(argv: Optional[List[str]] = None):
    # No flags of our own: everything belongs to the compiler
    args = sys.argv[1:] if argv is None else list(argv)

    try:
        status = DiagnosticEngine().run(args)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        print(f"Fatal Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(status)

if __name__ == "__main__":
    run()
