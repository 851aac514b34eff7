import logging
from collections.abc import Iterable

import chardet

DEFAULT_ENCODING = "utf-8"

_log = logging.getLogger(__name__)


def detect_encoding(file: Iterable[bytes]) -> str | None:
    """Determine the encoding of a binary file.

    Args:
        file: The file to detect the encoding of, as an iterable of byte chunks.

    Returns:
        The encoding if detected successfully, otherwise None.
    """

    detector = chardet.UniversalDetector()

    for line in file:
        if not detector.done:
            detector.feed(line)
        else:
            break

    result = detector.close()

    if encoding := result["encoding"]:
        encoding = encoding.lower()

        # Plain ASCII files are written back as UTF-8 so new non-ASCII values survive.
        if encoding == "ascii":
            encoding = DEFAULT_ENCODING

        _log.debug("detected encoding %s (confidence %s)", encoding, result["confidence"])

    return encoding


def decode(raw: bytes, encoding: str | None = DEFAULT_ENCODING) -> tuple[str, str]:
    """Decode the contents of an INI file.

    Args:
        raw: The file contents.
        encoding: The encoding to decode with.
            If None, detection is attempted and UTF-8 is used when it fails.

    Returns:
        A tuple of the decoded text (without any byte order mark) and the encoding used.
    """

    if encoding is None:
        encoding = detect_encoding(raw.splitlines(keepends=True)) or DEFAULT_ENCODING

    return raw.decode(encoding).removeprefix("\ufeff"), encoding
