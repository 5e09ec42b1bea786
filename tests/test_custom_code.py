"""Tests for keep-ts block extraction and embedding."""

import pytest

from typegen.codegen.core.custom_code import (
    KEEP_TS_BEGIN,
    KEEP_TS_END,
    embed_custom_code,
    extract_custom_code,
    read_custom_code,
    render_custom_code_block,
)

GENERATED = """export class User {
    name: string;

    //<keep-ts>
    greet(): string {
        return "hi";
    }
    //</keep-ts>
}
"""


def test_extract_single_block():
    assert extract_custom_code(GENERATED) == (
        'greet(): string {\n        return "hi";\n    }'
    )


@pytest.mark.parametrize("content", [None, "", "export class User {\n}\n"])
def test_extract_without_markers(content):
    assert extract_custom_code(content) == ""


def test_markers_are_case_insensitive():
    content = "//<KEEP-TS>\n    custom();\n//</Keep-Ts>"
    assert extract_custom_code(content) == "custom();"


def test_crlf_content_is_normalized():
    content = GENERATED.replace("\n", "\r\n")
    assert extract_custom_code(content) == extract_custom_code(GENERATED)


def test_multiple_blocks_are_joined_in_order():
    content = (
        "//<keep-ts>\n    first();\n//</keep-ts>\n"
        "middle\n"
        "//<keep-ts>\n    second();\n//</keep-ts>\n"
    )
    assert extract_custom_code(content, "  ") == "first();\n\n  second();"


def test_empty_block_is_dropped():
    assert extract_custom_code("//<keep-ts>   \n  //</keep-ts>") == ""


def test_adjacent_markers_do_not_swallow_next_block():
    content = "//<keep-ts>//</keep-ts>\nx\n//<keep-ts>\n  keep();\n//</keep-ts>"
    assert extract_custom_code(content) == "keep();"


def test_render_block():
    assert render_custom_code_block("foo();", "  ") == (
        f"  {KEEP_TS_BEGIN}\n  foo();\n  {KEEP_TS_END}"
    )
    assert render_custom_code_block("", "  ") == ""


def test_embed_appends_after_blank_line():
    body = "    name: string;"
    assert embed_custom_code(body, "foo();") == (
        "    name: string;\n\n    //<keep-ts>\n    foo();\n    //</keep-ts>"
    )


def test_embed_without_content_leaves_body_untouched():
    assert embed_custom_code("    name: string;", "") == "    name: string;"


def test_embed_into_empty_body():
    assert embed_custom_code("", "foo();") == "    //<keep-ts>\n    foo();\n    //</keep-ts>"


def test_extract_embed_is_a_fixed_point():
    body = "    name: string;"
    content = 'greet(): string {\n        return "hi";\n    }'

    first = embed_custom_code(body, content)
    second = embed_custom_code(body, extract_custom_code(first))
    third = embed_custom_code(body, extract_custom_code(second))

    assert first == second == third
    assert extract_custom_code(third) == content


def test_read_custom_code(tmp_path):
    path = tmp_path / "user.ts"
    assert read_custom_code(path) == ""

    path.write_text(GENERATED, encoding="utf-8")
    assert read_custom_code(path).startswith("greet(): string {")
