import dataclasses
from collections.abc import Iterator, MutableMapping


def fold(name: str) -> str:
    """Return the case-insensitive lookup key for a section or setting name.

    Raises:
        KeyError: The name is not a string.
    """

    if not isinstance(name, str):
        raise KeyError(name)

    return name.casefold()


@dataclasses.dataclass(slots=True)
class Setting:
    """A key in a section.

    Attributes:
        key: The key as it was first seen.
        value: The value, or None if the key is present without one (a bare flag).
            This is distinct from an empty string.
        comment: Comment lines preceding the setting, joined by newlines, or None.
    """

    key: str
    value: str | None = None
    comment: str | None = None


class Section(MutableMapping[str, str | None]):
    """An ordered, case-insensitive mapping of keys to values.

    Keys keep the casing they were first set with, and iterate in insertion order.
    Overwriting a value keeps the key's original casing and its comment.

    Attributes:
        name: The section name as it was first seen.
            The empty name is the preamble, i.e. settings before any heading.
        comment: Comment lines preceding the heading, joined by newlines, or None.
    """

    name: str
    comment: str | None

    def __init__(self, name: str, comment: str | None = None):
        self.name = name
        self.comment = comment

        self._settings: dict[str, Setting] = {}

    def __getitem__(self, key: str) -> str | None:
        return self._settings[fold(key)].value

    def __setitem__(self, key: str, value: str | None):
        if (setting := self._settings.get(fold(key))) is not None:
            setting.value = value
        else:
            self._settings[fold(key)] = Setting(key, value)

    def __delitem__(self, key: str):
        del self._settings[fold(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and fold(key) in self._settings

    def __iter__(self) -> Iterator[str]:
        return (s.key for s in self._settings.values())

    def __len__(self) -> int:
        return len(self._settings)

    def __repr__(self) -> str:
        return f"Section({self.name!r}, {dict(self)!r})"

    def setting(self, key: str | None) -> Setting | None:
        """Return the setting record for a key, or None if there is no such key."""

        if not isinstance(key, str):
            return None

        return self._settings.get(fold(key))

    def settings(self) -> Iterator[Setting]:
        """Iterate over the setting records in insertion order."""

        return iter(self._settings.values())
