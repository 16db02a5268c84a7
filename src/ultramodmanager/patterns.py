"""Cyber Grind pattern (.cgp) content validation.

A pattern is two 16x16 grids separated by one blank line:

- 16 height rows. A cell is a single digit (``0``-``9``) or a parenthesised
  signed integer for anything else, e.g. ``(10)`` or ``(-3)``.
- 16 prefab rows of exactly 16 characters from ``0 n p J s H``
  (none, melee spawn, projectile spawn, jump pad, stairs, hideous mass).

Pattern text is stored verbatim; this module only decides whether it is
well-formed.
"""

import logging

from pydantic import BaseModel
from pydantic import ConfigDict

from .exceptions import ContentValidationError

logger = logging.getLogger(__name__)

PATTERN_EXTENSION = ".cgp"
GRID_SIZE = 16
PREFAB_CHARS = frozenset("0npJsH")


class CyberGrindPattern(BaseModel):
    """Parsed pattern grids (row-major)."""

    model_config = ConfigDict(frozen=True)

    heights: tuple[tuple[int, ...], ...]
    prefabs: tuple[str, ...]


def _parse_height_row(line: str, line_no: int) -> tuple[int, ...]:
    cells: list[int] = []
    pos = 0
    while pos < len(line):
        char = line[pos]
        if char.isdigit():
            cells.append(int(char))
            pos += 1
        elif char == "(":
            end = line.find(")", pos)
            if end == -1:
                raise ValueError(f"line {line_no}: unclosed '(' at column {pos + 1}")
            token = line[pos + 1 : end]
            try:
                cells.append(int(token))
            except ValueError:
                raise ValueError(f"line {line_no}: invalid height {token!r} at column {pos + 1}") from None
            pos = end + 1
        else:
            raise ValueError(f"line {line_no}: unexpected character {char!r} at column {pos + 1}")

    if len(cells) != GRID_SIZE:
        raise ValueError(f"line {line_no}: expected {GRID_SIZE} height cells, got {len(cells)}")
    return tuple(cells)


def _parse_prefab_row(line: str, line_no: int) -> str:
    if len(line) != GRID_SIZE:
        raise ValueError(f"line {line_no}: expected {GRID_SIZE} prefab cells, got {len(line)}")
    for col, char in enumerate(line, start=1):
        if char not in PREFAB_CHARS:
            raise ValueError(f"line {line_no}: invalid prefab {char!r} at column {col}")
    return line


def parse_pattern(text: str) -> CyberGrindPattern:
    """
    Parse pattern text into its grids.

    Args:
        text: Raw pattern text (LF or CRLF line endings)

    Returns:
        Parsed pattern

    Raises:
        ContentValidationError: If the text is not a well-formed pattern.
            ``diagnostic`` holds the line-numbered reason.
    """
    lines = [line.rstrip() for line in text.splitlines()]
    while lines and not lines[-1]:
        lines.pop()

    expected = GRID_SIZE * 2 + 1
    try:
        if len(lines) != expected:
            raise ValueError(f"expected {expected} lines, got {len(lines)}")

        heights = tuple(_parse_height_row(lines[i], i + 1) for i in range(GRID_SIZE))

        if lines[GRID_SIZE]:
            raise ValueError(f"line {GRID_SIZE + 1}: expected blank separator line")

        prefabs = tuple(_parse_prefab_row(lines[i], i + 1) for i in range(GRID_SIZE + 1, expected))

    except ValueError as e:
        diagnostic = str(e)
        raise ContentValidationError(f"Invalid pattern: {diagnostic}", diagnostic=diagnostic) from e

    return CyberGrindPattern(heights=heights, prefabs=prefabs)


def validate_pattern(text: str) -> None:
    """Validate pattern text.

    Raises:
        ContentValidationError: If the text is rejected
    """
    parse_pattern(text)
    logger.debug("Pattern content validated")
