"""typegen - generate TypeScript files from type metadata."""

from .codegen import (
    GenerationSpec,
    generate_from_metadata,
    get_generator,
    load_catalog,
    load_config,
    preview,
)

__version__ = "0.1.0"

__all__ = [
    "GenerationSpec",
    "generate_from_metadata",
    "get_generator",
    "load_catalog",
    "load_config",
    "preview",
]
