import pytest

from tvmaze_server.sanitize import strip_html


def test_strip_html_removes_tags():
    assert strip_html("<b>Hi</b> there") == "Hi there"


def test_strip_html_trims_whitespace():
    assert strip_html("  <p> Lost </p>\n") == "Lost"


@pytest.mark.parametrize("value", [None, "", "   ", "<p></p>", "<p> <br/> </p>"])
def test_strip_html_collapses_empty_to_none(value):
    assert strip_html(value) is None


@pytest.mark.parametrize("value", [
    "<p><b>Under the Dome</b> is the story of a small town.</p>",
    "Plain text",
    "<<b>b>",
    "a < b and c > d",
    "<>",
    "<p></p>",
    None,
])
def test_strip_html_is_idempotent(value):
    once = strip_html(value)
    assert strip_html(once) == once
