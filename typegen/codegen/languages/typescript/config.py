"""
TypeScript-specific type mappings.

Maps host primitive type names onto TypeScript types. Lookups are
case-insensitive; user-supplied mappings take precedence.
"""

from typing import Dict, Optional


TYPESCRIPT_TYPE_MAP = {
    # Text
    "string": "string",
    "str": "string",
    "char": "string",
    "guid": "string",
    "uuid": "string",
    "uri": "string",
    "system.string": "string",
    "system.char": "string",
    "system.guid": "string",
    "system.uri": "string",
    # Numbers
    "number": "number",
    "int": "number",
    "integer": "number",
    "long": "number",
    "short": "number",
    "byte": "number",
    "sbyte": "number",
    "uint": "number",
    "ulong": "number",
    "ushort": "number",
    "float": "number",
    "double": "number",
    "decimal": "number",
    "system.int16": "number",
    "system.int32": "number",
    "system.int64": "number",
    "system.uint16": "number",
    "system.uint32": "number",
    "system.uint64": "number",
    "system.byte": "number",
    "system.sbyte": "number",
    "system.single": "number",
    "system.double": "number",
    "system.decimal": "number",
    # Booleans
    "bool": "boolean",
    "boolean": "boolean",
    "system.boolean": "boolean",
    # Dates
    "date": "Date",
    "datetime": "Date",
    "datetimeoffset": "Date",
    "timestamp": "Date",
    "system.datetime": "Date",
    "system.datetimeoffset": "Date",
    # Anything
    "any": "any",
    "object": "any",
    "dynamic": "any",
    "unknown": "unknown",
    "system.object": "any",
    "void": "void",
}


class TypeScriptTypeConfig:
    """TypeScript type mapping configuration."""

    def __init__(self, type_mappings: Optional[Dict[str, str]] = None):
        self.custom_mappings = dict(type_mappings or {})
        self._custom_lower = {k.lower(): v for k, v in self.custom_mappings.items()}

    def map_type(self, name: str) -> Optional[str]:
        """Return the TypeScript type for a host type name, or None if not built in."""
        if name in self.custom_mappings:
            return self.custom_mappings[name]
        key = name.lower()
        if key in self._custom_lower:
            return self._custom_lower[key]
        return TYPESCRIPT_TYPE_MAP.get(key)

    def is_builtin(self, name: str) -> bool:
        return self.map_type(name) is not None
