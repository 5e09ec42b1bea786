"""
Exceptions raised by the generation core.

Every error carries the offending type identity and/or path so that the
caller can report it and abort; the core never retries or skips.
"""

from typing import Optional


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        path: Optional[str] = None,
    ):
        self.type_name = type_name
        self.path = path
        details = []
        if type_name:
            details.append(f"type '{type_name}'")
        if path:
            details.append(f"path '{path}'")
        if details:
            message = f"{message} ({', '.join(details)})"
        super().__init__(message)


class ConfigurationError(GeneratorError):
    """A type cannot be rendered with the current configuration or tags."""

    pass


class MetadataError(GeneratorError):
    """The type metadata handed to the generator is ill-formed."""

    pass


class OutputError(GeneratorError):
    """Reading or writing a generated file failed."""

    pass
