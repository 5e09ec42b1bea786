"""
TypeScript-specific naming utilities and sanitization.

Handles TypeScript reserved words and property-name quoting.
"""

import re

from ...core.naming import NameSanitizer


# Words that cannot name a class, interface or enum
TYPESCRIPT_RESERVED_WORDS = {
    "any",
    "boolean",
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "declare",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "implements",
    "import",
    "in",
    "instanceof",
    "interface",
    "let",
    "never",
    "new",
    "null",
    "number",
    "object",
    "package",
    "private",
    "protected",
    "public",
    "return",
    "static",
    "string",
    "super",
    "switch",
    "symbol",
    "this",
    "throw",
    "true",
    "try",
    "type",
    "typeof",
    "undefined",
    "unknown",
    "var",
    "void",
    "while",
    "with",
    "yield",
}

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def create_typescript_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for TypeScript type names."""
    return NameSanitizer(TYPESCRIPT_RESERVED_WORDS)


def is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER.match(name))


def property_name(name: str, quote: str = '"') -> str:
    """Return ``name`` usable as a property key, quoting it when needed."""
    if is_identifier(name):
        return name
    escaped = name.replace("\\", "\\\\").replace(quote, f"\\{quote}")
    return f"{quote}{escaped}{quote}"
