"""Allow ``python -m pdf_optimize``."""

from pdf_optimize.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
