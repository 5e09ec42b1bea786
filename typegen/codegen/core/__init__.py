"""
Core code generation components.

Provides the metadata model, naming, nullability, dependency resolution,
import paths, custom-code preservation and the generation orchestrator
used by language generators.
"""

from .config import ConfigError, ConfigManager, GeneratorConfig, load_config
from .custom_code import (
    KEEP_TS_BEGIN,
    KEEP_TS_END,
    embed_custom_code,
    extract_custom_code,
    read_custom_code,
)
from .dependencies import TypeDependencyResolver
from .errors import ConfigurationError, GeneratorError, MetadataError, OutputError
from .generator import CodeGenerator, GeneratedFile, GenerationResult, generate_files
from .metadata import (
    CustomImport,
    DependencyRole,
    MemberMetadata,
    RefKind,
    TypeCatalog,
    TypeDependencyInfo,
    TypeIdentity,
    TypeKind,
    TypeMetadata,
    TypeRef,
    load_catalog,
    merge_catalogs,
)
from .naming import NameConverterChain, NameSanitizer
from .nullability import NullabilityFlags
from .paths import compute_import_path, resolve_output_dir
from .storage import FileSystem, MemoryFileSystem
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratedFile",
    "GenerationResult",
    "generate_files",
    # Errors
    "GeneratorError",
    "ConfigurationError",
    "MetadataError",
    "OutputError",
    # Metadata model
    "TypeMetadata",
    "MemberMetadata",
    "TypeRef",
    "RefKind",
    "TypeKind",
    "TypeIdentity",
    "TypeCatalog",
    "TypeDependencyInfo",
    "DependencyRole",
    "CustomImport",
    "load_catalog",
    "merge_catalogs",
    # Pipeline pieces
    "TypeDependencyResolver",
    "NullabilityFlags",
    "compute_import_path",
    "resolve_output_dir",
    "KEEP_TS_BEGIN",
    "KEEP_TS_END",
    "extract_custom_code",
    "embed_custom_code",
    "read_custom_code",
    # Naming utilities
    "NameConverterChain",
    "NameSanitizer",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Storage
    "FileSystem",
    "MemoryFileSystem",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
