"""
typegen Code Generation Module

Generates TypeScript files from normalized type metadata.
"""

from .core.config import ConfigError, GeneratorConfig, load_config
from .core.errors import ConfigurationError, GeneratorError, MetadataError, OutputError
from .core.generator import CodeGenerator, GeneratedFile, GenerationResult, generate_files
from .core.metadata import (
    MemberMetadata,
    TypeCatalog,
    TypeKind,
    TypeMetadata,
    TypeRef,
    load_catalog,
)
from .core.nullability import NullabilityFlags
from .core.storage import FileSystem, MemoryFileSystem
from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    list_supported_languages,
)
from .spec import GenerationSpec


def generate_from_metadata(
    document,
    language="typescript",
    config=None,
    spec=None,
    file_system=None,
):
    """
    Generate files from a metadata document.

    Args:
        document: Metadata document (``{"types": [...]}``) or a TypeCatalog
        language: Target language name
        config: Generator configuration (GeneratorConfig, dict or path)
        spec: Optional GenerationSpec applied to the catalog
        file_system: File system to write to (defaults to disk)

    Returns:
        GenerationResult with the written files
    """
    catalog = document if isinstance(document, TypeCatalog) else load_catalog(document)
    if spec is not None:
        catalog = spec.apply(catalog)

    generator = get_generator(language, config)
    return generate_files(generator, catalog, file_system=file_system)


def preview(document, language="typescript", config=None, spec=None):
    """
    Render files without touching the disk.

    Returns:
        Dict mapping output path to file content
    """
    file_system = MemoryFileSystem(read_through=True)
    generate_from_metadata(document, language, config, spec, file_system)
    return dict(file_system.files)


__version__ = "0.1.0"

__all__ = [
    "CodeGenerator",
    "GeneratedFile",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "ConfigError",
    "ConfigurationError",
    "MetadataError",
    "OutputError",
    "TypeCatalog",
    "TypeMetadata",
    "MemberMetadata",
    "TypeRef",
    "TypeKind",
    "NullabilityFlags",
    "FileSystem",
    "MemoryFileSystem",
    "GenerationSpec",
    "GeneratorRegistry",
    "RegistryError",
    "generate_files",
    "generate_from_metadata",
    "preview",
    "get_generator",
    "list_supported_languages",
    "load_catalog",
    "load_config",
]
