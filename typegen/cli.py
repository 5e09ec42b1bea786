"""
Command-line interface for typegen.

    typegen generate [-p FOLDER ...] [-c CONFIG ...] [-m METADATA ...] [-v]
    typegen getcwd

Each project folder is paired with the config path at the same position
(``tgconfig.json`` inside the folder by default).
"""

from __future__ import annotations

import argparse
import dataclasses
import os
import sys
from pathlib import Path
from typing import Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from . import __version__
from .codegen.core.config import (
    DEFAULT_CONFIG_FILE,
    ConfigError,
    GeneratorConfig,
    get_config_manager,
    load_config,
)
from .codegen.core.errors import GeneratorError
from .codegen.core.generator import GenerationResult, generate_files
from .codegen.core.metadata import TypeCatalog, load_catalog, merge_catalogs
from .codegen.core.storage import FileSystem, MemoryFileSystem
from .codegen.registry import RegistryError, get_generator, list_supported_languages
from .logging_config import configure_logging, get_logger
from .utils import JSONLoaderError, is_url, load_json

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_APPLICATION_ERROR = 1
EXIT_GENERIC_ERROR = 4
EXIT_HELP = 5
EXIT_GETCWD = 6


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


console = Console()


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="typegen",
        description="Generate TypeScript files from type metadata.",
    )
    parser.add_argument("--version", action="version", version=f"typegen {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser("generate", help="Generate TypeScript files")
    generate.add_argument(
        "-p",
        "--project-folder",
        action="append",
        default=[],
        metavar="FOLDER",
        help="Project folder (repeatable, default: current directory)",
    )
    generate.add_argument(
        "-c",
        "--config-path",
        action="append",
        default=[],
        metavar="FILE",
        help=f"Config file relative to the project folder (default: {DEFAULT_CONFIG_FILE})",
    )
    generate.add_argument(
        "-m",
        "--metadata",
        action="append",
        default=[],
        metavar="FILE_OR_URL",
        help="Metadata document(s); overrides metadataFiles from the config",
    )
    generate.add_argument(
        "-o",
        "--output",
        metavar="DIR",
        help="Base output directory; overrides outputPath from the config",
    )
    generate.add_argument(
        "-l",
        "--language",
        default="typescript",
        choices=list_supported_languages() + ["ts"],
        help="Target language (default: typescript)",
    )
    generate.add_argument(
        "--dry-run",
        action="store_true",
        help="Render files without writing them",
    )
    generate.add_argument(
        "-v", "--verbose", action="store_true", help="Show verbose output"
    )

    subparsers.add_parser("getcwd", help="Print the current working directory")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the ``typegen`` command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=getattr(args, "verbose", False))

    if args.command is None:
        parser.print_help()
        return EXIT_HELP

    if args.command == "getcwd":
        console.print(f"Current working directory is: {os.getcwd()}")
        return EXIT_GETCWD

    try:
        project_folders = args.project_folder or ["."]
        for index, project_folder in enumerate(project_folders):
            config_path = (
                args.config_path[index] if index < len(args.config_path) else None
            )
            handle_generate(project_folder, config_path, args)
        return EXIT_OK
    except (CLIError, ConfigError, GeneratorError, JSONLoaderError, RegistryError) as e:
        logger.error("APPLICATION ERROR: %s", e)
        console.print(f"❌ [red]{e}[/red]")
        return EXIT_APPLICATION_ERROR
    except Exception as e:
        logger.exception("GENERIC ERROR: %s", e)
        return EXIT_GENERIC_ERROR


def handle_generate(
    project_folder: str, config_path: str | None, args: argparse.Namespace
) -> GenerationResult:
    """Generate the files of one project folder."""
    folder = Path(project_folder)
    config = _load_project_config(folder, config_path, args)

    catalog = _load_metadata(folder, args.metadata or config.metadata_files)
    generator = get_generator(args.language, config)

    if args.dry_run:
        file_system = MemoryFileSystem(read_through=True)
    else:
        file_system = FileSystem()
        if config.clear_output_directory:
            file_system.clear_directory(config.output_path)

    logger.info('Generating files for project "%s"...', folder)
    result = generate_files(generator, catalog, file_system=file_system)

    _print_result(result, dry_run=args.dry_run, verbose=args.verbose)
    logger.info('Files for project "%s" generated successfully.', folder)
    return result


def _load_project_config(
    folder: Path, config_path: str | None, args: argparse.Namespace
) -> GeneratorConfig:
    if config_path:
        config_file = folder / config_path
    else:
        default_file = folder / DEFAULT_CONFIG_FILE
        config_file = default_file if default_file.exists() else None

    overrides = {}
    if args.output:
        overrides["output_path"] = args.output

    config = load_config("typescript", custom_config=overrides, config_file=config_file)

    for warning in get_config_manager().validate_config(config):
        logger.warning("Config: %s", warning)

    output_path = Path(config.output_path) if config.output_path else Path(".")
    if not output_path.is_absolute():
        output_path = folder / output_path

    return dataclasses.replace(config, output_path=str(output_path))


def _load_metadata(folder: Path, sources: Sequence[str]) -> TypeCatalog:
    if not sources:
        raise CLIError(
            "No metadata documents: pass --metadata or set metadataFiles in the config"
        )

    catalogs = []
    for source in sources:
        try:
            if is_url(source):
                _, document = load_json(url=source)
            else:
                path = Path(source)
                _, document = load_json(file_path=path if path.is_absolute() else folder / path)
        except FileNotFoundError as e:
            raise CLIError(str(e)) from e
        catalogs.append(load_catalog(document))

    return merge_catalogs(catalogs)


def _print_result(result: GenerationResult, dry_run: bool, verbose: bool) -> None:
    title = "Files that would be generated" if dry_run else "Generated files"
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("Type", style="cyan")
    table.add_column("File", style="green")
    table.add_column("Preserved", justify="center")

    for generated in result.files:
        table.add_row(
            str(generated.type_identity),
            str(generated.path),
            "✓" if generated.custom_code else "",
        )

    console.print(table)

    for warning in result.warnings:
        console.print(f"⚠️  [yellow]{warning}[/yellow]")

    if verbose:
        for key, value in result.metadata.items():
            console.print(f"  {key}: {value}")


if __name__ == "__main__":
    sys.exit(main())
