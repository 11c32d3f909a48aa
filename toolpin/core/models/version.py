"""
Version spec model — a parsed but not yet pinned version expression.

A spec is one of:

    alias      ``latest``, ``stable``, ``lts-hydrogen``
    version    a full semantic version, ``1.2.3`` (a leading ``v`` is dropped)
    req        an npm-style range, ``^1.2``, ``~18``, ``>=1 <2``, ``1.x``
    req-any    ranges joined with ``||``

Nothing here talks to a release registry; resolving a spec to an
actual release is someone else's job.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

import semantic_version

from toolpin.core.errors import VersionParseError

_ALIAS_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9_\-/.*]*$")
_V_PREFIX_RE = re.compile(r"^[vV](?=\d)")


class VersionKind(StrEnum):
    """Which shape of expression a spec holds."""

    ALIAS = "alias"
    VERSION = "version"
    REQ = "req"
    REQ_ANY = "req-any"


@dataclass(frozen=True)
class UnresolvedVersionSpec:
    """A version expression as written by the user, validated but unresolved."""

    text: str
    kind: VersionKind

    @classmethod
    def parse(cls, value: str) -> UnresolvedVersionSpec:
        """Parse a free-form string.

        Raises:
            VersionParseError: carrying the original string and the
                underlying parser failure.
        """
        text = _V_PREFIX_RE.sub("", value.strip())

        if not text:
            raise VersionParseError(value, "empty version")

        if _ALIAS_RE.match(text):
            return cls(text=text, kind=VersionKind.ALIAS)

        try:
            if "||" in text:
                semantic_version.NpmSpec(text)
                return cls(text=text, kind=VersionKind.REQ_ANY)

            try:
                semantic_version.Version(text)
                return cls(text=text, kind=VersionKind.VERSION)
            except ValueError:
                pass

            _build_requirement(text)
        except ValueError as e:
            raise VersionParseError(value, e) from e

        return cls(text=text, kind=VersionKind.REQ)

    @property
    def is_alias(self) -> bool:
        return self.kind == VersionKind.ALIAS

    def matches(self, version: str) -> bool:
        """Check a concrete version against this spec.

        Aliases never match a concrete version; they need a registry.
        """
        if self.kind == VersionKind.ALIAS:
            return False
        try:
            candidate = semantic_version.Version(_V_PREFIX_RE.sub("", version.strip()))
        except ValueError:
            return False
        if self.kind == VersionKind.VERSION:
            return candidate == semantic_version.Version(self.text)
        return candidate in _build_requirement(self.text)

    def __str__(self) -> str:
        return self.text


def _build_requirement(text: str) -> semantic_version.SimpleSpec | semantic_version.NpmSpec:
    """Comma-separated ranges use the simple grammar, everything else npm's."""
    if "," in text:
        return semantic_version.SimpleSpec(text)
    return semantic_version.NpmSpec(text)
