"""Tests for JSON loading helpers."""

from unittest.mock import Mock, patch

import pytest
import requests

from typegen.utils import JSONLoaderError, is_url, load_json, load_json_from_url


def test_load_json_from_file(tmp_path):
    path = tmp_path / "types.json"
    path.write_text('{"types": []}', encoding="utf-8-sig")
    source, data = load_json(file_path=path)
    assert source == str(path)
    assert data == {"types": []}


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json(file_path=tmp_path / "missing.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "types.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(JSONLoaderError, match="Invalid JSON"):
        load_json(file_path=path)


def test_requires_exactly_one_source(tmp_path):
    with pytest.raises(JSONLoaderError):
        load_json()
    with pytest.raises(JSONLoaderError):
        load_json(file_path=tmp_path / "a.json", url="https://example.com/a.json")


@patch("typegen.utils.requests.get")
def test_load_json_from_url(mock_get):
    response = Mock()
    response.headers = {"content-type": "application/json"}
    response.json.return_value = {"types": []}
    mock_get.return_value = response

    source, data = load_json(url="https://example.com/types")

    assert source == "https://example.com/types"
    assert data == {"types": []}
    mock_get.assert_called_once_with("https://example.com/types", timeout=30)


@patch("typegen.utils.requests.get")
def test_url_timeout(mock_get):
    mock_get.side_effect = requests.exceptions.Timeout()
    with pytest.raises(JSONLoaderError, match="timeout"):
        load_json_from_url("https://example.com/types.json")


def test_invalid_url():
    with pytest.raises(JSONLoaderError, match="Invalid URL"):
        load_json_from_url("not a url")


@pytest.mark.parametrize(
    "source, expected",
    [
        ("https://example.com/types.json", True),
        ("http://localhost:8080/types", True),
        ("types.json", False),
        ("C:\\metadata\\types.json", False),
        ("ftp://example.com/types.json", False),
    ],
)
def test_is_url(source, expected):
    assert is_url(source) is expected
