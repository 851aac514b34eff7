import io
import logging
import os
import pathlib
from collections.abc import Iterator, Mapping
from typing import IO, Any, TypeVar

from . import convert, syntax
from .encoding import DEFAULT_ENCODING, decode
from .exceptions import MissingPathError
from .model import Section, fold

T = TypeVar("T")

PREAMBLE = ""

_log = logging.getLogger(__name__)


def _comment_lines(comment: str | None) -> list[str]:
    if not comment:
        return []

    return [syntax.COMMENT + line for line in comment.split("\n")]


class Document:
    """An INI document: an ordered, case-insensitive mapping of section names to sections.

    Comment lines are kept with the heading or setting that follows them
    and written back out in front of it.
    Values are always written double-quoted, whatever quoting they were read with.

    Indexing a section that does not exist creates it, i.e. `doc["new"]["key"] = "value"` just works.
    Use section() or has_section() to look up a section without creating it.

    Attributes:
        path: Where the document was loaded from, and where persist() writes to by default.
        encoding: The encoding used to read and write files.
            If None, the encoding is detected when loading.
        trailing_comment: Comment lines after the last heading or setting, or None.

    Args:
        path: If not None, the file to load the document from.
        encoding: See the encoding attribute. Defaults to UTF-8.
    """

    path: pathlib.Path | None
    encoding: str | None
    trailing_comment: str | None

    def __init__(
        self,
        path: str | os.PathLike[str] | None = None,
        *,
        encoding: str | None = DEFAULT_ENCODING,
    ):
        self._sections: dict[str, Section] = {}

        self.path = None
        self.encoding = encoding
        self.trailing_comment = None

        if path is not None:
            self.load(path)

    # Mapping-like access to sections.

    def __getitem__(self, name: str) -> Section:
        return self.get_or_create_section(name)

    def __setitem__(self, name: str, settings: Mapping[str, str | None]):
        section = self.get_or_create_section(name)

        # Copy first, the settings may be the section itself.
        settings = dict(settings)
        comments = {fold(s.key): s.comment for s in section.settings()}

        section.clear()
        section.update(settings)

        # Keys that survive keep their comments.
        for setting in section.settings():
            setting.comment = comments.get(fold(setting.key))

    def __delitem__(self, name: str):
        del self._sections[fold(name)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_section(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __str__(self) -> str:
        return self.to_str()

    def __repr__(self) -> str:
        return f"Document(path={self.path!r}, sections={self.sections!r})"

    @property
    def sections(self) -> list[str]:
        """The section names in order."""

        return [s.name for s in self._sections.values()]

    def section(self, name: str | None) -> Section | None:
        """Return a section, or None if it does not exist (or the name is not a string)."""

        if not isinstance(name, str):
            return None

        return self._sections.get(fold(name))

    def get_or_create_section(self, name: str) -> Section:
        """Return a section, creating it first if it does not exist."""

        if (section := self.section(name)) is None:
            section = Section(name)

            if name == PREAMBLE:
                # The preamble has no heading, so it must come first to read back into itself.
                self._sections = {PREAMBLE: section} | self._sections
            else:
                self._sections[fold(name)] = section

        return section

    def add_section(self, name: str | None):
        """Add an empty section.
        Nothing happens if the name is None or the section already exists.
        """

        if name is None:
            return

        self.get_or_create_section(name)

    def remove_section(self, name: str | None):
        """Remove a section. Nothing happens if the name is None or the section does not exist."""

        if self.has_section(name):
            del self._sections[fold(name)]

    def has_section(self, name: str | None) -> bool:
        return self.section(name) is not None

    def has_setting(self, section: str | None, key: str | None) -> bool:
        sect = self.section(section)
        return sect is not None and key in sect

    def get(
        self, section: str | None, key: str | None, default: str | None = None
    ) -> str | None:
        """Get a value.

        Args:
            section: The section name.
            key: The key in the section.
            default: What to return if the section or key does not exist.

        Returns:
            The value (None for a key without a value), or the default.
        """

        if not self.has_setting(section, key):
            return default

        return self._sections[fold(section)][key]

    def set(self, section: str, key: str, value: str | None):
        """Set a value, creating the section if needed. Existing comments are kept.

        Args:
            section: The section name.
            key: The key in the section.
            value: The value. None writes the key without a value.
        """

        self.get_or_create_section(section)[key] = value

    def remove_setting(self, section: str | None, key: str | None):
        """Remove a key. Nothing happens if the section or key does not exist."""

        if self.has_setting(section, key):
            del self._sections[fold(section)][key]

    def get_comment(self, section: str | None, key: str | None = None) -> str | None:
        """Get the comment of a section heading, or of a setting if key is given.

        Returns:
            The comment lines joined by newlines, or None if there is no comment.
        """

        if (sect := self.section(section)) is None:
            return None

        if key is None:
            return sect.comment

        setting = sect.setting(key)
        return setting.comment if setting is not None else None

    def set_comment(self, section: str, comment: str | None, key: str | None = None):
        """Set the comment of a section heading, or of a setting if key is given.
        The section is created if needed.

        Raises:
            KeyError: The key does not exist in the section.
        """

        sect = self.get_or_create_section(section)

        if key is None:
            sect.comment = comment
        elif (setting := sect.setting(key)) is not None:
            setting.comment = comment
        else:
            raise KeyError(key)

    # Typed access.

    def get_as(
        self, section: str | None, key: str | None, cls: type[T], default: T | None = None
    ) -> T | None:
        """Get a value converted to another type, or the default if it does not exist.

        Raises:
            ConversionError: The value could not be converted.
        """

        if not self.has_setting(section, key):
            return default

        return convert.structure_value(self.get(section, key), cls)

    def read_section(self, section: str, cls: type[T]) -> T:
        """Build an attrs class from a section's settings.

        Raises:
            ConversionError: See convert.structure_section().
        """

        return convert.structure_section(self.section(section) or Section(section), cls)

    def write_section(self, section: str, obj: Any):
        """Write the fields of an attrs instance into a section, keeping other keys."""

        self.get_or_create_section(section).update(convert.unstructure_section(obj))

    # Parsing.

    def parse(self, text: str):
        """Replace the contents of the document with parsed INI text.

        Parsing never fails: malformed lines are read as best they can be.

        Args:
            text: The text to parse.
        """

        self._sections.clear()
        self.trailing_comment = None

        current = PREAMBLE
        comments: list[str] = []

        for entry, comment in syntax.tokenize(text):
            if comment.strip():
                comments.append(comment)

            if entry is None:
                continue

            if isinstance(entry, syntax.Heading):
                current = entry.name
                owner = self.get_or_create_section(current)
            else:
                section = self.get_or_create_section(current)
                section[entry.key] = entry.value
                owner = section.setting(entry.key)

            # Pending comments belong to the first heading or setting after them.
            if comments:
                owner.comment = "\n".join(comments)
                comments.clear()

        if comments:
            self.trailing_comment = "\n".join(comments)

        _log.debug("parsed %d section(s)", len(self._sections))

    def load(self, path: str | os.PathLike[str]):
        """Load the document from a file, and remember the path for persist().

        If the file does not exist, it is created empty first (along with its directory).

        Args:
            path: The file to load.

        Raises:
            OSError: The file could not be created or read.
        """

        path = pathlib.Path(path)

        if not path.exists():
            _log.info("creating missing file %s", path)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()

        _log.debug("loading %s", path)

        text, self.encoding = decode(path.read_bytes(), self.encoding)

        self.path = path
        self.parse(text)

    # Serialization.

    def to_lines(self) -> list[str]:
        """Serialize the document to a list of lines (without line terminators)."""

        lines = []

        for section in self._sections.values():
            lines.extend(_comment_lines(section.comment))

            if section.name:
                lines.append(f"[{section.name}]")

            for setting in section.settings():
                lines.extend(_comment_lines(setting.comment))

                if setting.value is None:
                    lines.append(setting.key.strip())
                else:
                    lines.append(f'{setting.key.strip()}="{setting.value}"')

        lines.extend(_comment_lines(self.trailing_comment))

        return lines

    def to_str(self) -> str:
        """Serialize the document to a string.

        Lines are separated by the platform's line terminator, with none after the last line.
        """

        return os.linesep.join(self.to_lines())

    def dump(self, file: IO[bytes] | IO[str]):
        """Write the serialized document to an open file.

        Binary files are written to in the document's encoding.
        No line terminator is written after the last line.

        Args:
            file: The file to write to.
        """

        text = self.to_str()

        if isinstance(file, io.TextIOBase):
            file.write(text)
        else:
            file.write(text.encode(self.encoding or DEFAULT_ENCODING))

    def persist(
        self, target: str | os.PathLike[str] | IO[bytes] | IO[str] | None = None
    ):
        """Save the document.

        Args:
            target: The path or open file to write to.
                If None, the path the document was loaded from is used.

        Raises:
            MissingPathError: No target was given and the document was not loaded from a file.
            OSError: The file could not be written.
        """

        if target is None:
            target = self.path

        if target is None:
            raise MissingPathError(
                "no path to persist to: the document was not loaded from a file"
            )

        if isinstance(target, (str, os.PathLike)):
            _log.debug("persisting to %s", target)

            # Encode before opening, so a failure leaves the file as it was.
            data = self.to_str().encode(self.encoding or DEFAULT_ENCODING)
            pathlib.Path(target).write_bytes(data)
        else:
            self.dump(target)


def load(path: str | os.PathLike[str], **kwargs) -> Document:
    """Load an INI file.

    Args:
        path: The file to load.
        **kwargs: Passed to Document().

    Returns:
        The document.
    """

    return Document(path, **kwargs)


def loads(text: str) -> Document:
    """Parse INI text.

    Args:
        text: The text to parse.

    Returns:
        The document.
    """

    doc = Document()
    doc.parse(text)
    return doc


def dump(doc: Document, file: IO[bytes] | IO[str]):
    """Serialize a document to an open file. See Document.dump()."""

    doc.dump(file)


def dumps(doc: Document) -> str:
    """Serialize a document to a string. See Document.to_str()."""

    return doc.to_str()
