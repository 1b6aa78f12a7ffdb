#!/usr/bin/env python3
"""Seed the configured bookshelf storage with the sample catalog.

See `bookshelf.startup.seed` for exit codes.
"""
from __future__ import annotations

import sys

from bookshelf.startup.seed import main

if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
