"""Pytest configuration and fixtures for typegen tests."""

from __future__ import annotations

import copy

import pytest

from typegen.codegen.core.config import GeneratorConfig
from typegen.codegen.core.metadata import load_catalog
from typegen.codegen.languages.typescript import TypeScriptGenerator

SAMPLE_DOCUMENT = {
    "types": [
        {
            "name": "App.Models.Entity",
            "kind": "class",
            "export": True,
            "modulePath": "models",
            "members": [{"name": "Id", "type": "guid"}],
        },
        {
            "name": "App.Models.User",
            "kind": "class",
            "export": True,
            "modulePath": "models",
            "base": "App.Models.Entity",
            "members": [
                {"name": "Name", "type": "string"},
                {"name": "Address", "type": "App.Models.Address", "nullability": "null"},
                {"name": "Roles", "type": {"array": "App.Security.Role"}},
                {"name": "Manager", "type": "App.Models.User", "nullability": "null|optional"},
                {"name": "PasswordHash", "type": "string", "ignore": True},
            ],
        },
        {
            "name": "App.Models.Address",
            "kind": "interface",
            "export": True,
            "modulePath": "models",
            "members": [
                {"name": "Street", "type": "string"},
                {"name": "Owner", "type": "App.Models.User", "nullability": "optional"},
            ],
        },
        {
            "name": "App.Security.Role",
            "kind": "enum",
            "export": True,
            "modulePath": "security",
            "members": [
                {"name": "Admin", "value": 0},
                {"name": "Reader", "value": 1},
            ],
        },
        {
            "name": "App.Models.Page",
            "kind": "interface",
            "export": True,
            "modulePath": "models/paging",
            "genericParameters": ["T"],
            "members": [
                {"name": "Items", "type": "T[]"},
                {"name": "Total", "type": "int"},
            ],
        },
        {
            "name": "App.Models.AuditRecord",
            "kind": "class",
            "modulePath": "models",
            "members": [{"name": "Message", "type": "string"}],
        },
    ]
}


@pytest.fixture
def document():
    """A fresh copy of the sample metadata document."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def catalog(document):
    return load_catalog(document)


@pytest.fixture
def config(tmp_path):
    return GeneratorConfig(output_path=str(tmp_path), add_file_heading=False)


@pytest.fixture
def generator(config):
    return TypeScriptGenerator(config)
