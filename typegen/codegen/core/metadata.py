"""
Normalized type metadata consumed by the generator.

The metadata provider (a JSON document, the declarative builder in
``typegen.codegen.spec``, or any host-side exporter) produces
``TypeMetadata`` values once per run. Generators only ever look at these
immutable values, never at live host objects.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
    Union,
)

from .errors import MetadataError
from .naming import remove_type_arity, to_snake_case
from .nullability import NullabilityFlags


# Tag keys understood by the generator
TAG_EXPORT = "export"
TAG_OUTPUT_DIR = "output_dir"
TAG_NAME = "name"
TAG_TS_TYPE = "ts_type"
TAG_IMPORT_PATH = "import_path"
TAG_ORIGINAL_TYPE_NAME = "original_type_name"


class TypeKind(Enum):
    """Kind of TypeScript declaration emitted for a type."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"


class RefKind(Enum):
    """Shape of a type reference."""

    NAMED = "named"
    ARRAY = "array"
    DICTIONARY = "dictionary"
    PARAMETER = "parameter"


class TypeIdentity(NamedTuple):
    """Identity of a type: qualified name plus generic arity."""

    name: str
    arity: int = 0

    def __str__(self) -> str:
        return f"{self.name}`{self.arity}" if self.arity else self.name


@dataclass(frozen=True)
class TypeRef:
    """Reference to a type from a member, a base clause or a generic argument."""

    name: str = ""
    arguments: Tuple["TypeRef", ...] = ()
    kind: RefKind = RefKind.NAMED

    @classmethod
    def named(cls, name: str, *arguments: "TypeRef") -> "TypeRef":
        return cls(name=name, arguments=tuple(arguments))

    @classmethod
    def array(cls, element: "TypeRef") -> "TypeRef":
        return cls(arguments=(element,), kind=RefKind.ARRAY)

    @classmethod
    def dictionary(cls, key: "TypeRef", value: "TypeRef") -> "TypeRef":
        return cls(arguments=(key, value), kind=RefKind.DICTIONARY)

    @classmethod
    def parameter(cls, name: str) -> "TypeRef":
        return cls(name=name, kind=RefKind.PARAMETER)

    @property
    def identity(self) -> TypeIdentity:
        return TypeIdentity(self.name, len(self.arguments))

    @property
    def is_container(self) -> bool:
        return self.kind in (RefKind.ARRAY, RefKind.DICTIONARY)

    def __str__(self) -> str:
        if self.kind == RefKind.ARRAY:
            return f"{self.arguments[0]}[]"
        if self.kind == RefKind.DICTIONARY:
            return f"Dictionary<{self.arguments[0]}, {self.arguments[1]}>"
        if self.arguments:
            return f"{self.name}<{', '.join(str(a) for a in self.arguments)}>"
        return self.name


@dataclass(frozen=True)
class MemberMetadata:
    """A single member (field/property, or enum value) of a type."""

    name: str
    type: Optional[TypeRef] = None
    nullability: Optional[NullabilityFlags] = None
    tags: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)
    ignored: bool = False
    default_value: Optional[str] = None

    @property
    def rendered_name(self) -> Optional[str]:
        return self.tags.get(TAG_NAME)

    @property
    def ts_type(self) -> Optional[str]:
        return self.tags.get(TAG_TS_TYPE)


@dataclass(frozen=True, eq=False)
class TypeMetadata:
    """
    Normalized description of one type.

    Equality and hashing use ``identity`` (qualified name + generic arity):
    the same type reached through different members must be recognised as
    the same import target.
    """

    name: str
    kind: TypeKind = TypeKind.CLASS
    generic_parameters: Tuple[str, ...] = ()
    members: Tuple[MemberMetadata, ...] = ()
    base: Optional[TypeRef] = None
    module_path: str = ""
    tags: Mapping[str, Any] = field(default_factory=dict)

    @property
    def identity(self) -> TypeIdentity:
        return TypeIdentity(self.name, len(self.generic_parameters))

    @property
    def simple_name(self) -> str:
        """Unqualified name without any arity suffix."""
        return remove_type_arity(self.name.rsplit(".", 1)[-1])

    @property
    def namespace(self) -> str:
        return self.name.rsplit(".", 1)[0] if "." in self.name else ""

    @property
    def is_exportable(self) -> bool:
        return bool(self.tags.get(TAG_EXPORT))

    @property
    def output_dir(self) -> Optional[str]:
        return self.tags.get(TAG_OUTPUT_DIR)

    @property
    def rendered_name(self) -> Optional[str]:
        return self.tags.get(TAG_NAME)

    def get_member(self, name: str) -> Optional[MemberMetadata]:
        """Get member by name."""
        for member in self.members:
            if member.name == name:
                return member
        return None

    def exported_members(self) -> List[MemberMetadata]:
        return [member for member in self.members if not member.ignored]

    def with_changes(self, **changes: Any) -> "TypeMetadata":
        return replace(self, **changes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeMetadata):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    def __repr__(self) -> str:
        return f"TypeMetadata({str(self.identity)!r}, kind={self.kind.value})"


class DependencyRole(Enum):
    """Where a dependency was discovered while walking a type."""

    MEMBER = "member"
    GENERIC_ARGUMENT = "generic_argument"
    BASE = "base"
    CUSTOM_IMPORT = "custom_import"


@dataclass(frozen=True)
class TypeDependencyInfo:
    """A type that must be imported by the file of another type."""

    type: TypeMetadata
    role: DependencyRole = DependencyRole.MEMBER

    @property
    def identity(self) -> TypeIdentity:
        return self.type.identity


@dataclass(frozen=True)
class CustomImport:
    """An explicit import requested by a member's tags."""

    type_name: str
    import_path: str
    original_type_name: Optional[str] = None

    @property
    def imported_name(self) -> str:
        return self.original_type_name or self.type_name

    @property
    def alias(self) -> Optional[str]:
        if self.original_type_name and self.original_type_name != self.type_name:
            return self.type_name
        return None


class TypeCatalog:
    """Ordered, identity-keyed collection of the types known to a run."""

    def __init__(self, types: Iterable[TypeMetadata] = ()):
        self._types: Dict[TypeIdentity, TypeMetadata] = {}
        for type_metadata in types:
            self.add(type_metadata)

    def add(self, type_metadata: TypeMetadata) -> None:
        if not type_metadata.name:
            raise MetadataError("Type metadata without a name")
        identity = type_metadata.identity
        if identity in self._types:
            raise MetadataError("Duplicate type in metadata", type_name=str(identity))
        self._types[identity] = type_metadata

    def replace(self, type_metadata: TypeMetadata) -> None:
        """Replace an already known type with an updated version."""
        if type_metadata.identity not in self._types:
            raise MetadataError("Unknown type", type_name=str(type_metadata.identity))
        self._types[type_metadata.identity] = type_metadata

    def get(self, key: Union[TypeIdentity, TypeRef, str]) -> Optional[TypeMetadata]:
        if isinstance(key, TypeRef):
            if key.kind != RefKind.NAMED:
                return None
            key = key.identity
        elif isinstance(key, str):
            key = TypeIdentity(key, 0)
        return self._types.get(key)

    def exportable(self) -> List[TypeMetadata]:
        return [t for t in self._types.values() if t.is_exportable]

    def copy(self) -> "TypeCatalog":
        return TypeCatalog(self._types.values())

    def __iter__(self) -> Iterator[TypeMetadata]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, TypeMetadata):
            return key.identity in self._types
        if isinstance(key, TypeRef):
            return self.get(key) is not None
        return key in self._types


# Metadata document loading


def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Accept both camelCase and snake_case keys."""
    return {to_snake_case(key): value for key, value in data.items()}


def parse_type_ref(data: Any, generic_parameters: Tuple[str, ...] = ()) -> TypeRef:
    """
    Convert a document type reference into a ``TypeRef``.

    Accepted forms:
        "string", "App.Models.User", "App.Models.User[]", "T"
        {"name": "App.Page", "arguments": [...]}
        {"array": <ref>}, {"dictionary": [<key>, <value>]}, {"parameter": "T"}
    """
    if isinstance(data, str):
        text = data.strip()
        if not text:
            raise MetadataError("Type reference without a name")
        if text.endswith("[]"):
            return TypeRef.array(parse_type_ref(text[:-2], generic_parameters))
        if text in generic_parameters:
            return TypeRef.parameter(text)
        return TypeRef.named(text)

    if not isinstance(data, Mapping):
        raise MetadataError(f"Invalid type reference: {data!r}")

    data = _normalize_keys(data)
    if "array" in data:
        return TypeRef.array(parse_type_ref(data["array"], generic_parameters))
    if "dictionary" in data:
        entry = data["dictionary"]
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise MetadataError(
                f"Dictionary reference needs a [key, value] pair: {entry!r}"
            )
        key, value = entry
        return TypeRef.dictionary(
            parse_type_ref(key, generic_parameters),
            parse_type_ref(value, generic_parameters),
        )
    if "parameter" in data:
        if not data["parameter"]:
            raise MetadataError("Generic parameter reference without a name")
        return TypeRef.parameter(data["parameter"])

    name = data.get("name")
    if not name:
        raise MetadataError(f"Type reference without a name: {data!r}")
    arguments = tuple(
        parse_type_ref(argument, generic_parameters)
        for argument in data.get("arguments", ())
    )
    return TypeRef.named(name, *arguments)


def parse_member(
    data: Mapping[str, Any], kind: TypeKind, generic_parameters: Tuple[str, ...] = ()
) -> MemberMetadata:
    """Convert a document member entry into ``MemberMetadata``."""
    data = _normalize_keys(data)
    name = data.get("name")
    if not name:
        raise MetadataError(f"Member without a name: {data!r}")

    type_ref = None
    if data.get("type") is not None:
        type_ref = parse_type_ref(data["type"], generic_parameters)
    elif kind != TypeKind.ENUM:
        raise MetadataError(f"Member '{name}' has no type")

    nullability = None
    if data.get("nullability") is not None:
        directive = data["nullability"]
        if not isinstance(directive, str):
            raise MetadataError(
                f"Nullability directive of member '{name}' must be a string: {directive!r}"
            )
        nullability = NullabilityFlags.parse(directive)

    default_value = data.get("default_value", data.get("value"))
    if default_value is not None:
        default_value = str(default_value)

    return MemberMetadata(
        name=name,
        type=type_ref,
        nullability=nullability,
        tags=_normalize_keys(data.get("tags") or {}),
        ignored=bool(data.get("ignore", False)),
        default_value=default_value,
    )


def _parse_generic_parameters(value: Any, type_name: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)) or not all(
        isinstance(parameter, str) and parameter for parameter in value
    ):
        raise MetadataError(
            f"Generic parameters must be a list of names: {value!r}", type_name=type_name
        )
    return tuple(value)


def parse_type(data: Mapping[str, Any]) -> TypeMetadata:
    """Convert a document type entry into ``TypeMetadata``."""
    data = _normalize_keys(data)
    name = data.get("name")
    if not name:
        raise MetadataError(f"Type without a name: {data!r}")

    try:
        kind = TypeKind(str(data.get("kind", "class")).lower())
    except ValueError as e:
        raise MetadataError(f"Unknown type kind: {data.get('kind')}", type_name=name) from e

    generic_parameters = _parse_generic_parameters(data.get("generic_parameters"), name)
    tags = _normalize_keys(data.get("tags") or {})
    # Shorthand: {"export": true, "outputDir": "models"} next to the name
    for key in (TAG_EXPORT, TAG_OUTPUT_DIR):
        if key in data:
            tags.setdefault(key, data[key])

    try:
        members = tuple(
            parse_member(member, kind, generic_parameters)
            for member in data.get("members") or ()
        )
        base = None
        if data.get("base") is not None:
            base = parse_type_ref(data["base"], generic_parameters)
    except MetadataError as e:
        raise MetadataError(str(e), type_name=name) from e

    return TypeMetadata(
        name=name,
        kind=kind,
        generic_parameters=generic_parameters,
        members=members,
        base=base,
        module_path=data.get("module_path") or "",
        tags=tags,
    )


def load_catalog(document: Union[Mapping[str, Any], List[Any]]) -> TypeCatalog:
    """
    Build a ``TypeCatalog`` from a metadata document.

    Args:
        document: ``{"types": [...]}`` or a bare list of type entries

    Returns:
        TypeCatalog in document order

    Raises:
        MetadataError: If the document is ill-formed
    """
    if isinstance(document, Mapping):
        entries = document.get("types")
    else:
        entries = document

    if not isinstance(entries, list):
        raise MetadataError("Metadata document must contain a list of types")

    return TypeCatalog(parse_type(entry) for entry in entries)


def merge_catalogs(catalogs: Iterable[TypeCatalog]) -> TypeCatalog:
    """Merge several catalogs; a type defined twice is an error."""
    merged = TypeCatalog()
    for catalog in catalogs:
        for type_metadata in catalog:
            merged.add(type_metadata)
    return merged
