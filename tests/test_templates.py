"""Tests for the template engine."""

import pytest

from typegen.codegen.core.templates import TemplateError, create_template_engine
from typegen.codegen.languages.typescript import TypeScriptGenerator


@pytest.fixture
def engine(tmp_path):
    (tmp_path / "hello.j2").write_text("{% if name %}\nHello {{ name }}\n{% endif %}\n")
    (tmp_path / "broken.j2").write_text("Hello {{ missing }}")
    return create_template_engine(tmp_path)


def test_render_directory_template(engine):
    assert engine.template_exists("hello.j2")
    assert engine.render_template("hello.j2", {"name": "World"}) == "Hello World"


def test_undefined_variables_are_errors(engine):
    with pytest.raises(TemplateError, match="broken.j2"):
        engine.render_template("broken.j2", {})


def test_missing_template(engine):
    assert not engine.template_exists("nope.j2")
    with pytest.raises(TemplateError, match="nope.j2"):
        engine.render_template("nope.j2", {})


def test_engine_without_directory_is_empty():
    engine = create_template_engine()
    assert not engine.template_exists("hello.j2")
    with pytest.raises(TemplateError):
        engine.render_template("hello.j2", {"name": "World"})


def test_typescript_templates_are_packaged():
    generator = TypeScriptGenerator()
    assert generator.template_exists("type.ts.j2")
    assert generator.template_exists("import.ts.j2")
    assert generator.render_import("User", "./user") == 'import { User } from "./user";'
    assert generator.render_import("MoneyValue", "@lib/money", "Money") == (
        'import { MoneyValue as Money } from "@lib/money";'
    )
