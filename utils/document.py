"""Line and position helpers for document snapshots.

Columns are counted in UTF-16 code units, the unit editors report cursor
positions in, so a character outside the Basic Multilingual Plane (an emoji,
for instance) takes two columns.
"""

import re

from models.request import Position

# Editors treat \r\n, \r and \n as line breaks
LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    """Split document text into lines without their line breaks."""
    return LINE_BREAK.split(text)


def utf16_length(text: str) -> int:
    """Length of text in UTF-16 code units."""
    return len(text.encode("utf-16-le")) // 2


def utf16_slice(text: str, units: int) -> str:
    """Return the leading ``units`` UTF-16 code units of text.

    A cut through a surrogate pair drops the incomplete character.
    """
    return text.encode("utf-16-le")[: units * 2].decode("utf-16-le", errors="ignore")


def clamp_position(text: str, position: Position) -> Position:
    """
    Clamp a position to the document.

    A line past the end maps to the end of the last line; a character past
    the end of its line maps to the end of that line.
    """
    lines = split_lines(text)
    if position.line >= len(lines):
        last = len(lines) - 1
        return Position(line=last, character=utf16_length(lines[last]))
    return Position(
        line=position.line,
        character=min(position.character, utf16_length(lines[position.line])),
    )


def get_line_prefix(text: str, position: Position) -> str:
    """Return the text of the cursor's line from column 0 up to the cursor."""
    clamped = clamp_position(text, position)
    return utf16_slice(split_lines(text)[clamped.line], clamped.character)
