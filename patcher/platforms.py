# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Platform resolution.

The effective platform is picked once per invocation from, in priority order,
an explicit override, a command-line argument and the host platform. Aliases
and families are listed explicitly below; nothing is pattern-matched beyond
the family prefixes.
"""

import logging
import sys
from typing import AbstractSet, Optional

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

# Token that makes a descriptor apply everywhere
ALL_PLATFORMS = "all"

# Alternate spellings -> canonical token
PLATFORM_ALIASES = {
    "darwin": "darwin",
    "mac": "darwin",
    "macos": "darwin",
    "osx": "darwin",
    "linux": "linux",
    "win32": "win32",
    "win": "win32",
    "windows": "win32",
    "freebsd": "freebsd",
}

# Canonical families; "linux-arm64" belongs to "linux", "linuxbrew" does not
PLATFORM_FAMILIES = ("linux", "darwin", "win32", "freebsd")


def normalize_platform(value: str) -> str:
    """
    Trim, lower-case and resolve an alias to its canonical token.

    Only the part before the first "-" is aliased: "macos-arm64" becomes
    "darwin-arm64".
    """
    token = value.strip().lower()
    head, sep, rest = token.partition("-")
    return PLATFORM_ALIASES.get(head, head) + sep + rest


def platform_family(token: str) -> Optional[str]:
    """Return the family a normalized token belongs to, or None."""
    for family in PLATFORM_FAMILIES:
        if token == family or token.startswith(family + "-"):
            return family
    return None


class EffectivePlatform(BaseModel):
    """The single platform used to evaluate every descriptor in a run."""

    model_config = ConfigDict(frozen=True)

    token: str
    family: Optional[str] = None

    @property
    def recognized(self) -> bool:
        return self.family is not None

    def matches(self, platforms: Optional[AbstractSet[str]]) -> bool:
        """Whether a descriptor restricted to ``platforms`` applies here."""
        if not platforms:
            return True
        if ALL_PLATFORMS in platforms or self.token in platforms:
            return True
        return self.family is not None and self.family in platforms

    def __str__(self) -> str:
        return self.token


def resolve_platform(
    override: Optional[str] = None,
    cli_arg: Optional[str] = None,
    host: Optional[str] = None,
) -> EffectivePlatform:
    """
    Resolve the effective platform.

    Args:
        override: Explicit override (flag or environment); wins if non-empty
        cli_arg: Platform given on the command line
        host: Host platform identifier; defaults to ``sys.platform``

    Returns:
        EffectivePlatform. Unknown tokens resolve to themselves with no family.
    """
    if override and override.strip():
        source, raw = "override", override
    elif cli_arg and cli_arg.strip():
        source, raw = "argument", cli_arg
    else:
        source, raw = "host", host if host is not None else sys.platform

    token = normalize_platform(raw)
    family = platform_family(token)
    if family is None:
        logger.warning(
            f"Unrecognized platform {token!r}; platform-restricted patches will be skipped"
        )
    logger.debug(f"Resolved platform {token!r} from {source} (family: {family})")
    return EffectivePlatform(token=token, family=family)
