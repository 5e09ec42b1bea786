"""
Preservation of hand-written code across regenerations.

Anything between ``//<keep-ts>`` and ``//</keep-ts>`` in a previously
generated file is carried over into the freshly generated one. This block
is the only state that survives a run.
"""

import re
from pathlib import Path
from typing import Optional, Union

from ...logging_config import get_logger
from .errors import OutputError

logger = get_logger(__name__)

KEEP_TS_TAG = "keep-ts"
KEEP_TS_BEGIN = f"//<{KEEP_TS_TAG}>"
KEEP_TS_END = f"//</{KEEP_TS_TAG}>"

_KEEP_TS_PATTERN = re.compile(
    r"//<keep-ts>(.*?)//</keep-ts>", re.IGNORECASE | re.DOTALL
)


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def extract_custom_code(content: Optional[str], indent: str = "    ") -> str:
    """
    Extract the preserved content of every keep-ts block in ``content``.

    Blocks are trimmed and joined in order of appearance, separated by a
    blank line and ``indent``. Returns an empty string when there are no
    blocks (or no content).
    """
    if not content:
        return ""

    blocks = []
    for match in _KEEP_TS_PATTERN.finditer(content):
        block = _normalize_newlines(match.group(1)).strip()
        if block:
            blocks.append(block)

    return f"\n\n{indent}".join(blocks)


def read_custom_code(file_path: Union[str, Path], indent: str = "    ") -> str:
    """
    Read a previously generated file and extract its preserved content.

    A missing file yields an empty string.

    Raises:
        OutputError: If the file exists but cannot be read
    """
    path = Path(file_path)
    if not path.exists():
        return ""

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Failed to read existing file: {e}", path=str(path)) from e

    return extract_custom_code(content, indent)


def render_custom_code_block(content: str, indent: str = "    ") -> str:
    """Wrap preserved content in a fresh marker pair (empty content -> "")."""
    content = _normalize_newlines(content or "").strip()
    if not content:
        return ""
    return f"{indent}{KEEP_TS_BEGIN}\n{indent}{content}\n{indent}{KEEP_TS_END}"


def embed_custom_code(body: str, content: str, indent: str = "    ") -> str:
    """
    Append the preserved block to a generated body.

    The block is separated from the body by a blank line; nothing is
    appended when ``content`` is empty.
    """
    block = render_custom_code_block(content, indent)
    if not block:
        return body
    if not body:
        return block
    logger.debug("Embedding preserved block (%d chars)", len(block))
    return f"{body}\n\n{block}"
