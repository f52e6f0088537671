# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Configuration module for the patcher.

All options are read from the environment at import time. Command-line flags
take precedence over the values below.
"""

import os

# ============================================================================
# Target Selection
# ============================================================================

PATCH_TARGET = os.getenv("AZERON_PATCH_TARGET", os.path.join("app", "dist", "main-process.js"))
"""
Path to the minified main-process bundle to patch.
Relative paths are resolved against the current working directory.
"""

PATCH_PLATFORM = os.getenv("AZERON_PATCH_PLATFORM", "")
"""
Explicit platform override.
Takes precedence over the positional platform argument and the host platform.
Examples: 'linux', 'linux-arm64', 'darwin', 'macos'
"""

# ============================================================================
# Patch Behaviour
# ============================================================================

STRICT_MULTIPLICITY = os.getenv("AZERON_PATCH_STRICT_MULTIPLICITY", "false").lower() == "true"
"""
Treat a search string found more than once as a failure.
By default the patcher warns and replaces every occurrence.
"""

PREVIEW_CHARS = int(os.getenv("AZERON_PATCH_PREVIEW_CHARS", "100"))
"""
Number of characters of the search string shown in failure diagnostics.
"""

# ============================================================================
# Logging
# ============================================================================

LOG_LEVEL = os.getenv("AZERON_PATCH_LOG_LEVEL", "INFO").upper()
"""
Logging level for the patcher itself.
Options: 'DEBUG', 'INFO', 'WARNING', 'ERROR'
"""
