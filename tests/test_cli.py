"""Tests for the typegen command line."""

import json

import pytest

from typegen.cli import (
    EXIT_APPLICATION_ERROR,
    EXIT_GETCWD,
    EXIT_HELP,
    EXIT_OK,
    create_parser,
    main,
)


@pytest.fixture
def project(tmp_path, document):
    (tmp_path / "types.json").write_text(json.dumps(document), encoding="utf-8")
    (tmp_path / "tgconfig.json").write_text(
        json.dumps(
            {
                "outputPath": "src/generated",
                "metadataFiles": ["types.json"],
                "addFileHeading": False,
            }
        ),
        encoding="utf-8",
    )
    return tmp_path


def test_no_command_prints_help():
    assert main([]) == EXIT_HELP


def test_getcwd(capsys):
    assert main(["getcwd"]) == EXIT_GETCWD
    assert "Current working directory is:" in capsys.readouterr().out


def test_parser_defaults():
    args = create_parser().parse_args(["generate"])
    assert args.project_folder == []
    assert args.config_path == []
    assert args.language == "typescript"
    assert args.dry_run is False


def test_generate_from_project_config(project):
    assert main(["generate", "-p", str(project)]) == EXIT_OK

    output = project / "src" / "generated"
    assert (output / "models" / "user.ts").exists()
    assert (output / "security" / "role.ts").read_text(encoding="utf-8").startswith(
        "export enum Role {\n"
    )


def test_generate_with_explicit_config_and_output(project):
    (project / "custom.json").write_text(
        json.dumps({"metadataFiles": ["types.json"], "singleQuotes": True}),
        encoding="utf-8",
    )
    code = main(["generate", "-p", str(project), "-c", "custom.json", "-o", "out"])

    assert code == EXIT_OK
    address = (project / "out" / "models" / "address.ts").read_text(encoding="utf-8")
    assert "from './user';" in address


def test_metadata_option_overrides_config(project, tmp_path):
    other = tmp_path / "other.json"
    other.write_text(
        json.dumps([{"name": "App.Only", "export": True, "members": []}]),
        encoding="utf-8",
    )
    assert main(["generate", "-p", str(project), "-m", str(other)]) == EXIT_OK
    output = project / "src" / "generated"
    assert (output / "only.ts").exists()
    assert not (output / "models").exists()


def test_dry_run_writes_nothing(project):
    assert main(["generate", "-p", str(project), "--dry-run"]) == EXIT_OK
    assert not (project / "src").exists()


def test_clear_output_directory(project):
    stale = project / "src" / "generated" / "stale.ts"
    stale.parent.mkdir(parents=True)
    stale.write_text("old", encoding="utf-8")
    config = json.loads((project / "tgconfig.json").read_text(encoding="utf-8"))
    config["clearOutputDirectory"] = True
    (project / "tgconfig.json").write_text(json.dumps(config), encoding="utf-8")

    assert main(["generate", "-p", str(project)]) == EXIT_OK
    assert not stale.exists()
    assert (project / "src" / "generated" / "models" / "user.ts").exists()


def test_missing_metadata_file(project):
    assert main(["generate", "-p", str(project), "-m", "missing.json"]) == EXIT_APPLICATION_ERROR


def test_no_metadata_configured(tmp_path):
    assert main(["generate", "-p", str(tmp_path)]) == EXIT_APPLICATION_ERROR


def test_invalid_metadata_document(project):
    (project / "types.json").write_text(json.dumps({"types": "nope"}), encoding="utf-8")
    assert main(["generate", "-p", str(project)]) == EXIT_APPLICATION_ERROR


@pytest.mark.parametrize(
    "entry",
    [
        {"name": "App.Map", "members": [{"name": "Items", "type": {"dictionary": ["string"]}}]},
        {"name": "App.Map", "members": [{"name": "Items", "type": "int", "nullability": 1}]},
        {"name": "App.Page", "genericParameters": "T"},
    ],
)
def test_malformed_type_entry(project, entry):
    (project / "types.json").write_text(json.dumps([entry]), encoding="utf-8")
    assert main(["generate", "-p", str(project)]) == EXIT_APPLICATION_ERROR


def test_invalid_json_metadata(project):
    (project / "types.json").write_text("{", encoding="utf-8")
    assert main(["generate", "-p", str(project)]) == EXIT_APPLICATION_ERROR


def test_missing_config_file(project):
    code = main(["generate", "-p", str(project), "-c", "missing.json"])
    assert code == EXIT_APPLICATION_ERROR


def test_several_project_folders(project, tmp_path_factory, document):
    second = tmp_path_factory.mktemp("second")
    (second / "types.json").write_text(json.dumps(document), encoding="utf-8")
    (second / "tg.json").write_text(
        json.dumps({"outputPath": "gen", "metadataFiles": ["types.json"]}),
        encoding="utf-8",
    )

    code = main(
        ["generate", "-p", str(project), "-p", str(second), "-c", "tgconfig.json", "-c", "tg.json"]
    )

    assert code == EXIT_OK
    assert (project / "src" / "generated" / "models" / "user.ts").exists()
    assert (second / "gen" / "models" / "user.ts").exists()
