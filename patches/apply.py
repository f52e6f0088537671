#!/usr/bin/env python3
"""Apply tracked patches to the unpacked upstream bundle.

Usage:
    python patches/apply.py                  # patch for the host platform
    python patches/apply.py linux            # patch for an explicit platform
    python patches/apply.py --check          # check which patches are applied
    python patches/apply.py --target PATH    # patch a bundle elsewhere

Requires the project to be installed (`pip install -e .`) so that `patcher`
and `patches` import. Run this after unpacking a new upstream release. Safe
to re-run: patches that are already applied are reported and left alone.
"""
from __future__ import annotations

from patcher.main import main

if __name__ == "__main__":
    raise SystemExit(main())
