"""
TypeScript code generator implementation.

Assembles one ``.ts`` file per type: import statements, the declaration
body and the preserved ``keep-ts`` block, rendered through templates.
"""

import textwrap
from pathlib import Path
from typing import List, Optional

from ....logging_config import get_logger
from ...core.config import ConfigError, GeneratorConfig, load_config
from ...core.custom_code import embed_custom_code, extract_custom_code
from ...core.dependencies import TypeDependencyResolver
from ...core.errors import ConfigurationError, MetadataError
from ...core.generator import CodeGenerator, GeneratedFile
from ...core.metadata import (
    MemberMetadata,
    RefKind,
    TypeCatalog,
    TypeKind,
    TypeMetadata,
    TypeRef,
)
from ...core.naming import NameConverterChain, UnknownConverterError, remove_type_arity
from ...core.nullability import NullabilityFlags
from ...core.paths import compute_import_path, resolve_output_dir
from .config import TypeScriptTypeConfig
from .naming import create_typescript_sanitizer, property_name

logger = get_logger(__name__)

HEADING_WIDTH = 100


class TypeScriptGenerator(CodeGenerator):
    """Code generator for TypeScript classes, interfaces and enums."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize TypeScript generator with configuration."""
        super().__init__(config)

        self.sanitizer = create_typescript_sanitizer()
        self.type_config = TypeScriptTypeConfig(self.config.type_mappings)
        self.default_nullability = NullabilityFlags.parse(self.config.default_nullability)
        self.quote = "'" if self.config.single_quotes else '"'

        try:
            self.file_name_converters = NameConverterChain.from_names(
                self.config.file_name_converters
            )
            self.type_name_converters = NameConverterChain.from_names(
                self.config.type_name_converters
            )
            self.member_name_converters = NameConverterChain.from_names(
                self.config.member_name_converters
            )
            self.enum_value_name_converters = NameConverterChain.from_names(
                self.config.enum_value_name_converters
            )
        except UnknownConverterError as e:
            raise ConfigError(str(e)) from e

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "typescript"

    @property
    def file_extension(self) -> str:
        """Return TypeScript file extension."""
        return self.config.custom.get("file_extension", ".ts")

    def get_template_directory(self) -> Path:
        """Return the TypeScript templates directory."""
        return Path(__file__).parent / "templates"

    def is_builtin(self, ref: TypeRef) -> bool:
        return self.type_config.is_builtin(ref.name)

    # Naming

    def get_file_name(self, type_metadata: TypeMetadata) -> str:
        """File base name (no extension) of a type."""
        name = self.file_name_converters.convert(type_metadata.simple_name, type_metadata)
        if not name:
            raise ConfigurationError(
                "File name converters produced an empty name",
                type_name=str(type_metadata.identity),
            )
        return name

    def get_type_name(self, type_metadata: TypeMetadata) -> str:
        """Name of a type as declared and imported in TypeScript."""
        if type_metadata.rendered_name:
            return type_metadata.rendered_name
        name = self.type_name_converters.convert(type_metadata.simple_name, type_metadata)
        if not name:
            raise ConfigurationError(
                "Type name converters produced an empty name",
                type_name=str(type_metadata.identity),
            )
        return self.sanitizer.sanitize_name(name)

    def get_member_name(self, member: MemberMetadata, owner: TypeMetadata) -> str:
        """Name of a member, quoted when it is not a plain identifier."""
        name = member.rendered_name
        if not name:
            converters = (
                self.enum_value_name_converters
                if owner.kind == TypeKind.ENUM
                else self.member_name_converters
            )
            name = converters.convert(member.name, owner)
        if not name:
            raise ConfigurationError(
                f"Member name converters produced an empty name for '{member.name}'",
                type_name=str(owner.identity),
            )
        return property_name(name, self.quote)

    # Paths

    def get_output_dir(self, type_metadata: TypeMetadata) -> Path:
        return resolve_output_dir(type_metadata, self.config.output_path)

    def get_output_path(self, type_metadata: TypeMetadata) -> Path:
        file_name = self.get_file_name(type_metadata) + self.file_extension
        return (self.get_output_dir(type_metadata) / file_name).absolute()

    # Rendering

    def render_type_ref(self, ref: TypeRef, catalog: TypeCatalog) -> str:
        """Render a type reference as TypeScript type text."""
        if ref.kind == RefKind.PARAMETER:
            return ref.name

        if ref.kind == RefKind.ARRAY:
            element = ref.arguments[0]
            element_text = self.render_type_ref(element, catalog)
            if element.kind == RefKind.DICTIONARY:
                return f"({element_text})[]"
            return f"{element_text}[]"

        if ref.kind == RefKind.DICTIONARY:
            key_text = self.render_type_ref(ref.arguments[0], catalog)
            if key_text not in ("string", "number"):
                key_text = "string"
            value_text = self.render_type_ref(ref.arguments[1], catalog)
            return f"{{ [key: {key_text}]: {value_text} }}"

        mapped = self.type_config.map_type(ref.name)
        if mapped is not None:
            name = mapped
        else:
            target = catalog.get(ref)
            if target is not None:
                name = self.get_type_name(target)
            else:
                name = remove_type_arity(ref.name.rsplit(".", 1)[-1])

        if ref.arguments:
            arguments = ", ".join(self.render_type_ref(a, catalog) for a in ref.arguments)
            return f"{name}<{arguments}>"
        return name

    def render_member(
        self, member: MemberMetadata, owner: TypeMetadata, catalog: TypeCatalog
    ) -> str:
        """Render one member line (without indentation)."""
        name = self.get_member_name(member, owner)

        if owner.kind == TypeKind.ENUM:
            if member.default_value is not None:
                return f"{name} = {member.default_value},"
            return f"{name},"

        flags = member.nullability
        if flags is None:
            flags = self.default_nullability

        if member.ts_type:
            type_text = member.ts_type
        elif member.type is None:
            raise MetadataError(
                f"Member '{member.name}' has no type", type_name=str(owner.identity)
            )
        else:
            type_text = self.render_type_ref(member.type, catalog)

        union = flags.union_members()
        if union:
            type_text = " | ".join([type_text, *union])

        optional_marker = "?" if flags.is_optional else ""
        line = f"{name}{optional_marker}: {type_text}"

        if owner.kind == TypeKind.CLASS and member.default_value is not None:
            line += f" = {member.default_value}"

        return line + ";"

    def render_import(self, name: str, path: str, alias: Optional[str] = None) -> str:
        return self.render_template(
            "import.ts.j2",
            {"name": name, "alias": alias, "path": path, "quote": self.quote},
        )

    def render_imports(self, type_metadata: TypeMetadata, catalog: TypeCatalog) -> List[str]:
        """
        Render the import statements of a type's file.

        Structural dependencies come first, in resolution order, followed by
        the explicit imports declared by member tags.
        """
        resolver = TypeDependencyResolver(catalog)
        from_dir = self.get_output_dir(type_metadata)
        lines = []

        for dependency in resolver.resolve(type_metadata):
            if dependency.type == type_metadata:
                # A type's own file declares it; importing it would clash
                continue
            to_dir = self.get_output_dir(dependency.type)
            path = compute_import_path(from_dir, to_dir, self.get_file_name(dependency.type))
            lines.append(self.render_import(self.get_type_name(dependency.type), path))

        for custom_import in resolver.custom_imports(type_metadata):
            lines.append(
                self.render_import(
                    custom_import.imported_name,
                    custom_import.import_path,
                    custom_import.alias,
                )
            )

        return lines

    def render_heritage(self, type_metadata: TypeMetadata, catalog: TypeCatalog) -> str:
        if type_metadata.kind == TypeKind.ENUM or type_metadata.base is None:
            return ""
        return f" extends {self.render_type_ref(type_metadata.base, catalog)}"

    def render_file(
        self,
        type_metadata: TypeMetadata,
        catalog: TypeCatalog,
        existing_content: Optional[str] = None,
    ) -> GeneratedFile:
        """Assemble the complete file of a type."""
        indent = self.config.indent

        imports = self.render_imports(type_metadata, catalog)
        members = [
            self.render_member(member, type_metadata, catalog)
            for member in type_metadata.exported_members()
        ]
        body = "\n".join(f"{indent}{line}" for line in members)

        custom_code = extract_custom_code(existing_content, indent)
        body_with_custom = embed_custom_code(body, custom_code, indent)

        type_parameters = ""
        if type_metadata.generic_parameters and type_metadata.kind != TypeKind.ENUM:
            type_parameters = f"<{', '.join(type_metadata.generic_parameters)}>"

        heading = self.config.heading_text
        context = {
            "heading_lines": textwrap.wrap(heading, HEADING_WIDTH) if heading else [],
            "imports": imports,
            "keyword": type_metadata.kind.value,
            "name": self.get_type_name(type_metadata),
            "type_parameters": type_parameters,
            "heritage": self.render_heritage(type_metadata, catalog),
            "body": body_with_custom,
        }
        content = self.render_template("type.ts.j2", context) + "\n"
        if self.config.line_ending != "\n":
            content = content.replace("\n", self.config.line_ending)

        return GeneratedFile(
            path=self.get_output_path(type_metadata),
            type_identity=type_metadata.identity,
            imports="\n".join(imports),
            body=body,
            custom_code=custom_code,
            content=content,
        )


def create_typescript_generator(
    config: Optional[GeneratorConfig] = None, **overrides
) -> TypeScriptGenerator:
    """Create a TypeScript generator, optionally overriding configuration values."""
    if config is None:
        config = load_config("typescript", custom_config=overrides or None)
    return TypeScriptGenerator(config)
