"""Tracked patches for the upstream Azeron Software build.

The descriptors in ``main_process`` are applied to the minified Electron
bundle ``app/dist/main-process.js`` after the upstream release is unpacked:

    python patches/apply.py              # patch for the host platform
    python patches/apply.py linux-arm64  # patch for another platform
    python patches/apply.py --check      # report without writing

See each descriptor in ``main_process`` for what it fixes and why.
"""

from .main_process import MAIN_PROCESS_PATCHES

__all__ = ["MAIN_PROCESS_PATCHES"]
