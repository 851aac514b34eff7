import pytest

from inidoc import syntax


def test_split_lines():
    text = "a=1\r\n\r\n  b = 2  \rc\n\n"
    assert list(syntax.split_lines(text)) == ["a=1", "b = 2", "c"]


def test_split_lines_blank():
    assert list(syntax.split_lines("\n \r\n\t\n")) == []


def test_split_comment():
    assert syntax.split_comment("key=a;comment") == ("key=a", "comment")


def test_split_comment_keeps_spacing():
    assert syntax.split_comment("key = a ; about a") == ("key = a", " about a")


def test_split_comment_quoted_semicolon():
    assert syntax.split_comment('key="a;b"') == ('key="a;b"', "")


def test_split_comment_after_quoted_semicolon():
    assert syntax.split_comment('key="a;b";c;d') == ('key="a;b"', "c;d")


def test_split_comment_only():
    assert syntax.split_comment("; just a comment") == ("", " just a comment")


def test_split_comment_unbalanced_quotes():
    line = 'key="a;b'
    assert syntax.split_comment(line) == (line, "")


def test_classify_heading():
    entry = syntax.classify("[this is a section]")
    assert isinstance(entry, syntax.Heading)
    assert entry.name == "this is a section"


def test_classify_property():
    entry = syntax.classify("こんにちは=konnichiwa")
    assert isinstance(entry, syntax.Property)
    assert entry.key == "こんにちは"
    assert entry.value == "konnichiwa"


def test_classify_property_with_spaces():
    entry = syntax.classify("key = value")
    assert entry == syntax.Property("key", "value")


def test_classify_property_extra_equals():
    assert syntax.classify("url=a=b=c") == syntax.Property("url", "a=b=c")


@pytest.mark.parametrize(
    "data,value",
    [
        ("flag", None),
        ("flag=", ""),
        ('flag=""', ""),
        ('flag=" padded "', " padded "),
        ('flag = "quoted"', '"quoted"'),
        ('flag=  spaced  ', "spaced"),
        ('flag="', '"'),
    ],
)
def test_classify_values(data: str, value: str | None):
    assert syntax.classify(data) == syntax.Property("flag", value)


def test_classify_blank():
    assert syntax.classify("") is None
    assert syntax.classify("   ") is None


def test_classify_hanging_bracket():
    # Not a heading, so it is read as a key without a value.
    assert syntax.classify("[hanging bracket") == syntax.Property("[hanging bracket")


def test_tokenize():
    text = "; intro\n[Main] ; heading\nbob=1"

    assert list(syntax.tokenize(text)) == [
        (None, " intro"),
        (syntax.Heading("Main"), " heading"),
        (syntax.Property("bob", "1"), ""),
    ]
