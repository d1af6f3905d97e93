"""Markup removal for TVMaze narrative text."""

import re
from typing import Optional

_TAG_RE = re.compile(r"<[^>]+>")


def strip_html(value: Optional[str]) -> Optional[str]:
    """Remove markup tags and surrounding whitespace.

    TVMaze summaries arrive as HTML fragments such as ``<p><b>Lost</b> ...</p>``.
    Returns None when the input is missing or nothing is left once the tags
    are gone, so callers never see an empty string.
    """
    if not value:
        return None

    return _TAG_RE.sub("", value).strip() or None
