"""
Base generator interface and the generation orchestrator.

A language generator renders one ``GeneratedFile`` per exportable type;
``generate_files`` drives it over a catalog, reading each destination file
right before overwriting it so preserved blocks carry over.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig
from .errors import ConfigurationError, GeneratorError, MetadataError, OutputError
from .metadata import RefKind, TypeCatalog, TypeIdentity, TypeMetadata, TypeRef
from .storage import FileSystem
from .templates import TemplateEngine, TemplateError, create_template_engine

logger = get_logger(__name__)


@dataclass(frozen=True)
class GeneratedFile:
    """Output of one type: destination path and its assembled text."""

    path: Path
    type_identity: TypeIdentity
    imports: str
    body: str
    custom_code: str
    content: str


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.ts')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def get_output_path(self, type_metadata: TypeMetadata) -> Path:
        """Return the destination file of a type."""
        pass

    @abstractmethod
    def render_file(
        self,
        type_metadata: TypeMetadata,
        catalog: TypeCatalog,
        existing_content: Optional[str] = None,
    ) -> GeneratedFile:
        """
        Assemble the file of a single type.

        Args:
            type_metadata: Type to render
            catalog: All types known to the run (for dependencies)
            existing_content: Current text of the destination file, if any

        Returns:
            The assembled file
        """
        pass

    def is_builtin(self, ref: TypeRef) -> bool:
        """Whether a named reference maps to a built-in target type."""
        return False

    def validate_catalog(self, catalog: TypeCatalog) -> List[str]:
        """
        Validate metadata for structural issues that don't stop generation.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for type_metadata in catalog.exportable():
            if not type_metadata.exported_members():
                warnings.append(f"Type '{type_metadata.name}' has no members")

            refs = [m.type for m in type_metadata.exported_members() if m.type and not m.ts_type]
            if type_metadata.base is not None:
                refs.append(type_metadata.base)

            for ref in refs:
                for named in _named_refs(ref):
                    if self.is_builtin(named):
                        continue
                    target = catalog.get(named)
                    if target is None:
                        warnings.append(
                            f"Type '{named.name}' used by '{type_metadata.name}' "
                            f"is unknown and will not be imported"
                        )
                    elif not target.is_exportable:
                        warnings.append(
                            f"Type '{named.name}' used by '{type_metadata.name}' "
                            f"is not exported"
                        )

        return warnings

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


def _named_refs(ref: TypeRef) -> Iterable[TypeRef]:
    if ref.kind == RefKind.NAMED:
        yield ref
    for argument in ref.arguments:
        yield from _named_refs(argument)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: List[GeneratedFile],
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Generated files, in processing order
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.files = files
        self.warnings = warnings or []
        self.metadata = metadata or {}

    @property
    def paths(self) -> List[str]:
        """Written file paths, in processing order."""
        return [str(generated.path) for generated in self.files]


def generate_files(
    generator: CodeGenerator,
    catalog: TypeCatalog,
    file_system: Optional[FileSystem] = None,
    types: Optional[Iterable[TypeMetadata]] = None,
    parallel: Optional[bool] = None,
    max_workers: Optional[int] = None,
) -> GenerationResult:
    """
    Generate and write one file per exportable type.

    Args:
        generator: Language generator
        catalog: All types known to the run
        file_system: Where existing files are read and new ones written
        types: Subset of types to generate (defaults to every exportable type)
        parallel: Process types on a thread pool (defaults to the config)
        max_workers: Thread pool size (defaults to the config)

    Returns:
        GenerationResult with the written files

    Raises:
        GeneratorError: On the first type that fails; nothing is skipped
    """
    file_system = file_system or FileSystem()
    targets = list(types) if types is not None else catalog.exportable()

    for target in targets:
        if target not in catalog:
            raise MetadataError("Type is not part of the catalog", type_name=str(target.identity))

    warnings = generator.validate_catalog(catalog)
    for warning in warnings:
        logger.warning(warning)

    _check_distinct_paths(generator, targets)

    def process(type_metadata: TypeMetadata) -> GeneratedFile:
        path = generator.get_output_path(type_metadata)
        logger.debug("Generating %s -> %s", type_metadata.identity, path)
        existing = file_system.read_text(path)
        try:
            generated = generator.render_file(type_metadata, catalog, existing)
        except TemplateError as e:
            raise GeneratorError(
                f"Template rendering failed: {e}", type_name=str(type_metadata.identity)
            ) from e
        file_system.write_text(generated.path, generated.content)
        logger.info("Generated %s", generated.path)
        return generated

    if parallel is None:
        parallel = generator.config.parallel
    if max_workers is None:
        max_workers = generator.config.max_workers

    if parallel and len(targets) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            # map() yields in submission order and re-raises the first failure
            files = list(executor.map(process, targets))
    else:
        files = [process(type_metadata) for type_metadata in targets]

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "type_count": len(targets),
        "catalog_size": len(catalog),
        "preserved_blocks": sum(1 for f in files if f.custom_code),
    }

    return GenerationResult(files, warnings, metadata)


def _check_distinct_paths(
    generator: CodeGenerator, targets: List[TypeMetadata]
) -> None:
    """Two types written to the same file would overwrite each other."""
    owners: Dict[str, TypeMetadata] = {}
    for type_metadata in targets:
        key = generator.get_output_path(type_metadata).as_posix()
        if key in owners:
            raise ConfigurationError(
                f"Output file collides with type '{owners[key].identity}'",
                type_name=str(type_metadata.identity),
                path=key,
            )
        owners[key] = type_metadata


__all__ = [
    "CodeGenerator",
    "ConfigurationError",
    "GeneratedFile",
    "GenerationResult",
    "GeneratorError",
    "MetadataError",
    "OutputError",
    "generate_files",
]
