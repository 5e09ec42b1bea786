"""
Nullability directives for generated members.

A directive is a ``|``-separated list of ``null``, ``undefined`` and
``optional`` tokens. ``null`` and ``undefined`` become a type union
(``string | null``); ``optional`` becomes the ``?`` marker on the member
name and is never part of the union string.
"""

from enum import Flag
from typing import Optional


class NullabilityFlags(Flag):
    """How an optional/nullable member is rendered."""

    NONE = 0
    NULL = 1
    UNDEFINED = 2
    OPTIONAL = 4

    @classmethod
    def parse(cls, directive: Optional[str]) -> "NullabilityFlags":
        """
        Parse a directive string such as ``"null|undefined"``.

        Tokens are trimmed and matched case-insensitively; unknown tokens
        are ignored. Empty input yields ``NONE``.
        """
        flags = cls.NONE
        if not directive:
            return flags

        for token in directive.split("|"):
            flag = _TOKENS.get(token.strip().lower())
            if flag is not None:
                flags |= flag

        return flags

    def to_flag_string(self) -> str:
        """Serialize the union part of the flags (``null`` before ``undefined``)."""
        parts = []
        if self & NullabilityFlags.NULL:
            parts.append("null")
        if self & NullabilityFlags.UNDEFINED:
            parts.append("undefined")
        return "|".join(parts)

    @property
    def is_optional(self) -> bool:
        return bool(self & NullabilityFlags.OPTIONAL)

    def union_members(self) -> list:
        """Return the TypeScript types appended to a member's type union."""
        serialized = self.to_flag_string()
        return serialized.split("|") if serialized else []


_TOKENS = {
    "null": NullabilityFlags.NULL,
    "undefined": NullabilityFlags.UNDEFINED,
    "optional": NullabilityFlags.OPTIONAL,
}


def parse_nullability(directive: Optional[str]) -> NullabilityFlags:
    """Convenience wrapper around ``NullabilityFlags.parse``."""
    return NullabilityFlags.parse(directive)


def format_nullability(flags: NullabilityFlags) -> str:
    """Convenience wrapper around ``NullabilityFlags.to_flag_string``."""
    return flags.to_flag_string()


def is_valid_directive(directive: str) -> bool:
    """Check that every token of a directive is recognised."""
    tokens = [token.strip().lower() for token in directive.split("|")]
    return all(token in _TOKENS for token in tokens)
