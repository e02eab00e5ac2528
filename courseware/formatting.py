"""Turn the HTML of courseware blocks into plain summary text."""

from __future__ import annotations

import re
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
from bs4.dammit import EntitySubstitution

# Tags after which the rendered page starts a new line.
LINE_BREAK_TAGS = (
    r"<br.*?>",
    r"</p.*?>",
    r"</h[1-6].*?>",
    r"</div.*?>",
    r"</li.*?>",
    r"</section.*?>",
    r"</article.*?>",
    r"</blockquote.*?>",
    r"</details.*?>",
    r"</summary.*?>",
)

_LINE_BREAK_RE = re.compile("|".join(f"(?:{tag})" for tag in LINE_BREAK_TAGS), re.IGNORECASE)


def strip_tags(html: str) -> str:
    """Return the text content of ``html`` with every tag removed.

    Character references stay encoded: ``&``, ``<`` and ``>`` in the text are
    escaped again once the tags are gone.
    """

    if "<" not in html and ">" not in html and "&" not in html:
        return html
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        soup = BeautifulSoup(html, "html.parser")
    return EntitySubstitution.substitute_xml(soup.get_text())


def format_summary(text: str) -> str:
    """Strip markup from ``text`` keeping line structure of block elements."""

    if not text:
        return ""
    text = _LINE_BREAK_RE.sub(lambda match: match.group(0) + "\n", text)
    return strip_tags(text).strip()
