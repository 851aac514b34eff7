"""Line-level INI syntax: splitting text into lines, lines into data and comment,
and classifying data as a section heading or a property.
"""

import dataclasses
import re
from collections.abc import Iterator

COMMENT = ";"
QUOTE = '"'

REGEX_LINE = re.compile(r"[^\r\n]+")


@dataclasses.dataclass(slots=True)
class Heading:
    """A section heading, i.e. [name]."""

    name: str


@dataclasses.dataclass(slots=True)
class Property:
    """A property, i.e. key=value.
    The value is None if the line has no '=' at all.
    """

    key: str
    value: str | None = None


def split_lines(text: str) -> Iterator[str]:
    """Lazily split text into trimmed, non-empty lines.

    Any run of carriage returns and newlines terminates a line.

    Args:
        text: The text to split.

    Yields:
        Each line, stripped of surrounding whitespace.
    """

    for m in REGEX_LINE.finditer(text):
        if line := m.group().strip():
            yield line


def split_comment(line: str) -> tuple[str, str]:
    """Separate a line into its data and trailing comment.

    Semicolons inside a double-quoted span are literal.
    If the quotes never balance, the whole line is data.

    Args:
        line: The line to split.

    Returns:
        A tuple of the trimmed data and the comment (without the leading ';').
        The comment is empty if there is none.
    """

    fragments = line.split(COMMENT)

    for taken in range(1, len(fragments) + 1):
        data = COMMENT.join(fragments[:taken])

        # An odd number of quotes means the data ends inside a quoted span.
        if data.count(QUOTE) % 2 == 0:
            return data.strip(), COMMENT.join(fragments[taken:])

    return line.strip(), ""


def unquote(value: str) -> str:
    """Remove one pair of double quotes enclosing a raw value, or trim it if there are none.

    The quotes must enclose the value exactly as written after '=',
    i.e. `key = "v"` has a leading space and reads as '"v"'.
    """

    if len(value) >= 2 and value.startswith(QUOTE) and value.endswith(QUOTE):
        return value[1:-1]

    return value.strip()


def classify(data: str) -> Heading | Property | None:
    """Classify the data part of a line.

    Args:
        data: The data to classify, as returned by split_comment().

    Returns:
        A heading, property, or None if the data is blank.
    """

    data = data.strip()

    if not data:
        return None

    if data.startswith("[") and data.endswith("]"):
        return Heading(data.strip("[]"))

    # Only the first '=' is structural.
    key, sep, value = data.partition("=")

    return Property(key.strip(), unquote(value) if sep else None)


def tokenize(text: str) -> Iterator[tuple[Heading | Property | None, str]]:
    """Parse text into a stream of entries and their comments.

    Args:
        text: The text to tokenize.

    Yields:
        A tuple of the line's entry (or None for a comment-only line) and its comment.
    """

    for line in split_lines(text):
        data, comment = split_comment(line)
        yield classify(data), comment
