#!/usr/bin/env python3
"""Repository entry point for termalign."""

from __future__ import annotations

from termalign.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
