import os

import pytest
from tagster import FilenameTags, ParsedName


@pytest.mark.parametrize(
    "name, expected",
    [
        ("report.txt", ParsedName("report", None, "txt")),
        ("report.Finance.txt", ParsedName("report", ["Finance"], "txt")),
        ("invoice.Urgent&Paid.pdf", ParsedName("invoice", ["Urgent", "Paid"], "pdf")),
        ("Makefile", ParsedName("Makefile", None, None)),
        ("Makefile.Build.", ParsedName("Makefile", ["Build"], "")),
        (".bashrc", ParsedName("", None, "bashrc")),
        ("archive.tar.gz", ParsedName("archive", ["tar"], "gz")),
        ("my.report.v2.pdf", ParsedName("my.report", ["v2"], "pdf")),
        ("notes..md", ParsedName("notes", [""], "md")),
        ("notes.&A&&B&.md", ParsedName("notes", ["", "A", "", "B", ""], "md")),
    ],
)
def test_parse(name: str, expected: ParsedName):
    assert FilenameTags.parse(name, "&") == expected


def test_parsed_tags_skip_empty_entries():
    assert FilenameTags.parse("notes.&A&&B&.md", "&").tags == ["A", "B"]
    assert FilenameTags.parse("notes..md", "&").tags == []
    assert FilenameTags.parse("notes.md", "&").tags == []


@pytest.mark.parametrize(
    "parsed, expected",
    [
        (ParsedName("report", None, "txt"), "report.txt"),
        (ParsedName("report", ["Finance", "Q1"], "txt"), "report.Finance&Q1.txt"),
        (ParsedName("Makefile", None, None), "Makefile"),
        (ParsedName("Makefile", ["Build"], None), "Makefile.Build."),
        (ParsedName("Makefile", [], ""), "Makefile"),
        (ParsedName("notes", ["", "A"], "md"), "notes.&A.md"),
        # the end of a dotted base must not turn into a tag
        (ParsedName("my.report", [], "pdf"), "my.report..pdf"),
    ],
)
def test_compose(parsed: ParsedName, expected: str):
    assert FilenameTags.compose(parsed, "&") == expected


def test_tags_in_drops_duplicates():
    assert FilenameTags.tags_in("/data/a.X&Y&X.txt", "&") == ["X", "Y"]
    assert FilenameTags.tags_in("/data/a.txt", "&") == []
    assert FilenameTags.tags_in("/data/my.report.v2.pdf", "&") == ["v2"]


@pytest.mark.parametrize(
    "name",
    ["report.txt", "a..txt", "a.P&&Q.txt", "my.report.v2.pdf", "Makefile", ".bashrc", "notes.&A&.md"],
)
def test_attach_then_detach_gives_back_the_name(name: str):
    tagged = FilenameTags.with_tag(name, "X", "&")
    assert tagged != name
    assert "X" in FilenameTags.parse(tagged, "&").tags
    assert FilenameTags.without_tag(tagged, "X", "&") == name


def test_detach_last_tag_of_dotted_base():
    untagged = FilenameTags.without_tag("my.report.v2.pdf", "v2", "&")
    assert untagged == "my.report..pdf"
    assert FilenameTags.parse(untagged, "&").tags == []


def test_with_and_without_tag_restore_the_name():
    original = os.path.join("data", "report.txt")

    tagged = FilenameTags.with_tag(original, "Finance", "&")
    assert tagged == os.path.join("data", "report.Finance.txt")

    tagged = FilenameTags.with_tag(tagged, "Q1", "&")
    assert tagged == os.path.join("data", "report.Finance&Q1.txt")

    # already present: unchanged
    assert FilenameTags.with_tag(tagged, "Q1", "&") == tagged

    untagged = FilenameTags.without_tag(tagged, "Finance", "&")
    assert untagged == os.path.join("data", "report.Q1.txt")
    assert FilenameTags.without_tag(untagged, "Q1", "&") == original


def test_without_tag_on_name_without_extension():
    tagged = FilenameTags.with_tag("Makefile", "Build", "&")
    assert tagged == "Makefile.Build."
    assert FilenameTags.without_tag(tagged, "Build", "&") == "Makefile"


def test_renamed_tag():
    assert FilenameTags.renamed_tag("a.X&Y.txt", "X", "Z", "&") == "a.Z&Y.txt"
    assert FilenameTags.renamed_tag("a.X&Y.txt", "X", "Y", "&") == "a.Y.txt"
    assert FilenameTags.renamed_tag("a.txt", "X", "Z", "&") == "a.txt"


def test_custom_delimiter():
    assert FilenameTags.parse("a.x+y.txt", "+").tags == ["x", "y"]
    assert FilenameTags.parse("a.x&y.txt", "+").tags == ["x&y"]


@pytest.mark.parametrize("name", ["", "a.b", "a&b", "a/b"])
def test_check_tag_name_rejects(name: str):
    assert FilenameTags.check_tag_name(name, "&")


def test_check_tag_name_accepts():
    assert FilenameTags.check_tag_name("Finance Q1", "&") is None
