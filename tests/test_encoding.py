import pytest

from inidoc import encoding

TEXT = "[設定]\nキー=値\n" * 20


@pytest.mark.parametrize("codec", ["utf-8", "shift_jis"])
def test_decode_given(codec: str):
    text, used = encoding.decode(TEXT.encode(codec), codec)

    assert text == TEXT
    assert used == codec


def test_decode_detect():
    raw = TEXT.encode("utf-8")

    text, used = encoding.decode(raw, None)

    assert text == TEXT
    assert used == "utf-8"


def test_decode_bom():
    text, _ = encoding.decode("\ufeffkey=value".encode("utf-8"))

    assert text == "key=value"


def test_decode_empty_falls_back():
    assert encoding.decode(b"", None) == ("", "utf-8")


def test_decode_invalid():
    with pytest.raises(UnicodeDecodeError):
        encoding.decode("値".encode("shift_jis"), "utf-8")
