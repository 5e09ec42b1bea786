"""
Naming utilities for generated TypeScript.

Provides case conversion helpers, named converters that can be chained
in configuration (``["pascal_to_kebab"]``), and a sanitizer that keeps
member names clear of target-language keywords.
"""

import re
from typing import Any, Callable, Dict, Iterable, List, Optional, Set


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    name = name.replace("-", "_")
    # Split acronyms from the following word: HTTPServer -> HTTP_Server
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    name = re.sub(r"_+", "_", name.lower())
    return name.strip("_")


def to_kebab_case(name: str) -> str:
    """Convert to kebab-case."""
    return to_snake_case(name).replace("_", "-")


def to_camel_case(name: str) -> str:
    """Convert snake or kebab names to camelCase."""
    parts = [part for part in re.split(r"[_\-\s]+", name) if part]
    if not parts:
        return name
    return parts[0][:1].lower() + parts[0][1:] + "".join(
        part[:1].upper() + part[1:] for part in parts[1:]
    )


def to_pascal_case(name: str) -> str:
    """Convert snake or kebab names to PascalCase."""
    parts = [part for part in re.split(r"[_\-\s]+", name) if part]
    return "".join(part[:1].upper() + part[1:] for part in parts)


def lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]


def upper_first(name: str) -> str:
    return name[:1].upper() + name[1:]


def remove_type_arity(name: str) -> str:
    """Strip a host-style arity suffix: ``Page`1`` -> ``Page``."""
    return name.split("`", 1)[0]


# A converter receives the current name and the type (or member owner) it
# belongs to, and returns the converted name.
NameConverter = Callable[[str, Optional[Any]], str]


def _simple(func: Callable[[str], str]) -> NameConverter:
    def converter(name: str, type_metadata: Optional[Any] = None) -> str:
        return func(name)

    converter.__name__ = func.__name__
    return converter


CONVERTERS: Dict[str, NameConverter] = {
    "identity": _simple(lambda name: name),
    "pascal_to_camel": _simple(lower_first),
    "camel_to_pascal": _simple(upper_first),
    "pascal_to_kebab": _simple(to_kebab_case),
    "pascal_to_snake": _simple(to_snake_case),
    "snake_to_camel": _simple(to_camel_case),
    "snake_to_pascal": _simple(to_pascal_case),
    "kebab_to_camel": _simple(to_camel_case),
    "kebab_to_pascal": _simple(to_pascal_case),
    "upper": _simple(str.upper),
    "lower": _simple(str.lower),
}


class UnknownConverterError(ValueError):
    """Raised when a configured converter name is not registered."""

    pass


def get_converter(name: str) -> NameConverter:
    """Look up a named converter; case and dashes in the name are ignored."""
    key = name.strip().lower().replace("-", "_")
    if key not in CONVERTERS:
        raise UnknownConverterError(
            f"Unknown name converter: {name}. Available: {', '.join(sorted(CONVERTERS))}"
        )
    return CONVERTERS[key]


class NameConverterChain:
    """Ordered converters applied one after another to a raw name."""

    def __init__(self, converters: Iterable[NameConverter] = ()):
        self._converters: List[NameConverter] = list(converters)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "NameConverterChain":
        return cls(get_converter(name) for name in names)

    def convert(self, name: str, type_metadata: Optional[Any] = None) -> str:
        for converter in self._converters:
            name = converter(name, type_metadata)
        return name


class NameSanitizer:
    """Keeps generated identifiers valid and clear of reserved words."""

    def __init__(self, reserved_words: Set[str] = None, suffix_on_conflict: str = "_"):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            suffix_on_conflict: Suffix appended to names that hit a reserved word
        """
        self.reserved_words = reserved_words or set()
        self.suffix_on_conflict = suffix_on_conflict
        self._name_cache: Dict[str, str] = {}

    def sanitize_name(self, name: str) -> str:
        """Return a safe identifier for ``name``."""
        if name in self._name_cache:
            return self._name_cache[name]

        cleaned = self._clean_basic(name)
        if cleaned in self.reserved_words:
            cleaned = f"{cleaned}{self.suffix_on_conflict}"

        self._name_cache[name] = cleaned
        return cleaned

    def _clean_basic(self, name: str) -> str:
        """Replace characters that are not valid in identifiers."""
        cleaned = re.sub(r"[^a-zA-Z0-9_$]", "_", name)

        if cleaned and cleaned[0].isdigit():
            cleaned = f"_{cleaned}"

        return cleaned or "member"
