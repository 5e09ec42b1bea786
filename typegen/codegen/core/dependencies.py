"""
Type dependency resolution.

Finds the exportable types a type's file has to import. Resolution is one
level deep: the dependencies of a dependency are resolved when that type is
itself generated, which keeps cyclic and self-referencing graphs finite.
"""

from typing import List, Optional, Set

from ...logging_config import get_logger
from .errors import ConfigurationError, MetadataError
from .metadata import (
    TAG_IMPORT_PATH,
    TAG_ORIGINAL_TYPE_NAME,
    TAG_TS_TYPE,
    CustomImport,
    DependencyRole,
    MemberMetadata,
    RefKind,
    TypeCatalog,
    TypeDependencyInfo,
    TypeIdentity,
    TypeMetadata,
    TypeRef,
)

logger = get_logger(__name__)


class TypeDependencyResolver:
    """Resolves structural dependencies and explicit imports of a type."""

    def __init__(self, catalog: TypeCatalog):
        self.catalog = catalog

    def resolve(self, type_metadata: TypeMetadata) -> List[TypeDependencyInfo]:
        """
        Get the ordered, de-duplicated structural dependencies of a type.

        Members are walked in declaration order, containers and generic
        arguments are unwrapped, and every exportable catalog type is
        recorded at its first occurrence. The base type comes last.

        Args:
            type_metadata: Type whose file is being generated

        Returns:
            Dependencies in first-encounter order
        """
        dependencies: List[TypeDependencyInfo] = []
        seen: Set[TypeIdentity] = set()

        for member in type_metadata.exported_members():
            if member.type is None or member.ts_type:
                # Enum values have no type; explicit TS types are imported by tag
                continue
            self._collect(
                member.type, DependencyRole.MEMBER, dependencies, seen, type_metadata
            )

        base = type_metadata.base
        if base is not None:
            for argument in base.arguments:
                self._collect(
                    argument,
                    DependencyRole.GENERIC_ARGUMENT,
                    dependencies,
                    seen,
                    type_metadata,
                )
            self._collect(base, DependencyRole.BASE, dependencies, seen, type_metadata)

        logger.debug(
            "Resolved %d dependencies for %s", len(dependencies), type_metadata.identity
        )
        return dependencies

    def _collect(
        self,
        ref: TypeRef,
        role: DependencyRole,
        dependencies: List[TypeDependencyInfo],
        seen: Set[TypeIdentity],
        owner: TypeMetadata,
    ) -> None:
        if ref.kind == RefKind.PARAMETER:
            return

        if ref.kind in (RefKind.ARRAY, RefKind.DICTIONARY):
            for argument in ref.arguments:
                self._collect(argument, role, dependencies, seen, owner)
            return

        if not ref.name:
            raise MetadataError(
                "Type reference without identity", type_name=str(owner.identity)
            )

        dependency = self.catalog.get(ref)
        if (
            dependency is not None
            and dependency.is_exportable
            and dependency.identity not in seen
        ):
            seen.add(dependency.identity)
            dependencies.append(TypeDependencyInfo(dependency, role))

        if role == DependencyRole.BASE:
            # Base arguments were collected before the base itself
            return

        for argument in ref.arguments:
            self._collect(
                argument, DependencyRole.GENERIC_ARGUMENT, dependencies, seen, owner
            )

    def custom_imports(self, type_metadata: TypeMetadata) -> List[CustomImport]:
        """
        Get explicit imports declared through member tags.

        Identical entries are merged; entries are never merged with
        structural dependencies, even when they point to the same type.

        Raises:
            ConfigurationError: If a member declares an import path without a type name
        """
        imports: List[CustomImport] = []
        for member in type_metadata.exported_members():
            custom_import = custom_import_for(type_metadata, member)
            if custom_import is not None and custom_import not in imports:
                imports.append(custom_import)
        return imports


def custom_import_for(
    type_metadata: TypeMetadata, member: MemberMetadata
) -> Optional[CustomImport]:
    """Build the explicit import declared by a member's tags, if any."""
    import_path = member.tags.get(TAG_IMPORT_PATH)
    if not import_path:
        return None

    type_name = member.tags.get(TAG_TS_TYPE)
    if not type_name:
        raise ConfigurationError(
            f"Member '{member.name}' declares an import path but no TypeScript type",
            type_name=str(type_metadata.identity),
        )

    return CustomImport(
        type_name=type_name,
        import_path=import_path,
        original_type_name=member.tags.get(TAG_ORIGINAL_TYPE_NAME) or None,
    )