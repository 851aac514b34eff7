"""Typed access to INI values.

Values are stored as opaque strings. Conversion to and from other types goes through
a single cattrs converter with every hook registered here, so the set of supported
conversions is fixed and visible in one place.
"""

from typing import Any, TypeVar

import attrs
import cattrs

from .exceptions import ConversionError
from .model import Section

T = TypeVar("T")

TRUE = frozenset({"1", "true", "yes", "on", "y", "t"})
FALSE = frozenset({"0", "false", "no", "off", "n", "f", ""})


def _structure_bool(value: str | None, _) -> bool:
    # A bare key without a value is a flag that is switched on.
    if value is None:
        return True

    folded = value.strip().casefold()
    if folded in TRUE:
        return True
    elif folded in FALSE:
        return False

    raise ValueError(f"not a boolean: '{value}'")


def _structure_str(value: str | None, _) -> str:
    return "" if value is None else value


converter = cattrs.Converter()
converter.register_structure_hook(bool, _structure_bool)
converter.register_structure_hook(str, _structure_str)
converter.register_unstructure_hook(bool, lambda b: "true" if b else "false")
converter.register_unstructure_hook(int, str)
converter.register_unstructure_hook(float, str)


def structure_value(value: str | None, cls: type[T]) -> T:
    """Convert a raw value to another type.

    Args:
        value: The raw value, or None for an absent value.
        cls: The type to convert to.

    Returns:
        The converted value.

    Raises:
        ConversionError: The value could not be converted.
    """

    try:
        return converter.structure(value, cls)
    except (ValueError, TypeError, cattrs.BaseValidationError) as e:
        raise ConversionError(f"cannot convert '{value}' to {cls!r}") from e


def unstructure_value(value: Any) -> str | None:
    """Convert a value to its raw form. None stays None (an absent value)."""

    if value is None:
        return None

    return str(converter.unstructure(value))


def structure_section(section: Section, cls: type[T]) -> T:
    """Build an attrs class from a section.

    Settings are matched to fields case-insensitively by name.
    Fields without a matching setting take their default.

    Args:
        section: The section to read.
        cls: The attrs class to build.

    Returns:
        The built instance.

    Raises:
        ConversionError: A value could not be converted or a required field has no setting.
    """

    config = {f.name: section[f.name] for f in attrs.fields(cls) if f.name in section}

    try:
        return converter.structure(config, cls)
    except (ValueError, TypeError, KeyError, cattrs.BaseValidationError) as e:
        raise ConversionError(f"cannot build {cls.__name__} from [{section.name}]") from e


def unstructure_section(obj: Any) -> dict[str, str | None]:
    """Serialize an attrs instance to a dict suitable for a section."""

    return {k: unstructure_value(v) for k, v in converter.unstructure(obj).items()}
