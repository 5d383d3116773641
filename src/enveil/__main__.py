#!/usr/bin/env python3
"""
Allow running enveil as a module: python -m enveil
"""

from enveil.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
