"""
TypeScript code generator module.

Generates TypeScript classes, interfaces and enums from type metadata.
"""

from .config import TYPESCRIPT_TYPE_MAP, TypeScriptTypeConfig
from .generator import TypeScriptGenerator, create_typescript_generator
from .naming import (
    TYPESCRIPT_RESERVED_WORDS,
    create_typescript_sanitizer,
    property_name,
)

__all__ = [
    "TypeScriptGenerator",
    "create_typescript_generator",
    "TypeScriptTypeConfig",
    "TYPESCRIPT_TYPE_MAP",
    "TYPESCRIPT_RESERVED_WORDS",
    "create_typescript_sanitizer",
    "property_name",
]
