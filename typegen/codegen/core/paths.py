"""
Output directory and import path computation.

Paths are handled with ``posixpath`` after converting separators, so the
generated module specifiers are identical on every platform.
"""

import posixpath
from pathlib import Path
from typing import Optional, Union

from .errors import ConfigurationError
from .metadata import TypeMetadata

PathLike = Union[str, Path]


def to_posix(path: PathLike) -> str:
    """Convert a path to forward-slash form."""
    return str(path).replace("\\", "/")


def compute_import_path(from_dir: PathLike, to_dir: PathLike, file_name: str) -> str:
    """
    Compute the module specifier used to import ``file_name`` living in ``to_dir``
    from a file living in ``from_dir``.

    Args:
        from_dir: Output directory of the importing file
        to_dir: Output directory of the imported file
        file_name: File base name of the imported file (no extension)

    Returns:
        ``./name``, ``./sub/name`` or ``../name`` style specifier
    """
    relative = posixpath.relpath(
        posixpath.normpath(to_posix(to_dir)), posixpath.normpath(to_posix(from_dir))
    )

    if relative == ".":
        return f"./{file_name}"
    if relative == ".." or relative.startswith("../"):
        return f"{relative}/{file_name}"
    return f"./{relative}/{file_name}"


def resolve_output_dir(
    type_metadata: TypeMetadata, base_output_dir: Optional[PathLike]
) -> Path:
    """
    Resolve the directory a type's file is written to.

    An explicit output directory tag wins (relative tags are taken relative
    to the base output directory); otherwise the type's module path is
    placed under the base output directory.

    Raises:
        ConfigurationError: If neither a tag nor a base directory is available
    """
    explicit = type_metadata.output_dir
    if explicit:
        explicit_path = Path(to_posix(explicit))
        if explicit_path.is_absolute() or base_output_dir is None:
            return explicit_path
        return Path(base_output_dir) / explicit_path

    if base_output_dir is None:
        raise ConfigurationError(
            "No output directory for type: set output_path or an output_dir tag",
            type_name=str(type_metadata.identity),
        )

    module_path = to_posix(type_metadata.module_path).strip("/")
    if module_path:
        return Path(base_output_dir) / module_path
    return Path(base_output_dir)
