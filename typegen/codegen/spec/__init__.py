"""Declarative generation specs (fluent alternative to metadata tags)."""

from .builder import (
    ClassSpecBuilder,
    EnumSpecBuilder,
    GenerationSpec,
    InterfaceSpecBuilder,
    SpecError,
)

__all__ = [
    "GenerationSpec",
    "ClassSpecBuilder",
    "InterfaceSpecBuilder",
    "EnumSpecBuilder",
    "SpecError",
]
