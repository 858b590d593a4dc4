"""
CSS selectors and extraction helpers for jlptsensei.com markup.

Listing pages hold a grammar table (one `tr.jl-row` per grammar point);
detail pages hold the header image and a list of example blocks.
"""

import re
from typing import Optional

from bs4 import BeautifulSoup, Tag

import structlog

logger = structlog.get_logger(__name__)


# Listing page table
ROW_SELECTOR = "tbody tr.jl-row"
ROW_ID_SELECTOR = "td.jl-td-num"
ROW_GRAMMAR_SELECTOR = "td.jl-td-gj a.jl-link"
ROW_READING_SELECTOR = "td.jl-td-gr a.jl-link"
ROW_MEANING_SELECTOR = "td.jl-td-gm"
ROW_LINK_SELECTOR = "a.jl-link"

# Detail page
MAIN_CONTENT_SELECTOR = "#main-content"
HEADER_IMAGE_SELECTOR = "#header-image"
EXAMPLE_SELECTOR = "div.example-cont"
EXAMPLE_SENTENCE_SELECTOR = ".example-main p.jp"


# Example panels: (id suffix, content selector)
EXAMPLE_READING_PANEL = ("_ja", ".alert-success")
EXAMPLE_MEANING_PANEL = ("_en", ".alert-primary")


def panel_text(element: Optional[Tag], panel_id: str, selector: str) -> str:
    """
    Text of selector matches inside the `.collapse` panels with panel_id.

    Panels are looked up by id attribute, not through a CSS string,
    since example ids may contain characters that are not valid in a
    selector (leading digits, quotes, backslashes).

    Returns:
        Text or empty string if nothing matches
    """
    if element is None:
        return ""

    panels = element.find_all(class_="collapse", id=panel_id)
    return "".join(
        m.get_text() for panel in panels for m in panel.select(selector)
    ).strip()


def child_text(element: Optional[Tag], selector: str) -> str:
    """
    Concatenated text of all elements matching selector, stripped.

    Args:
        element: Element to search within
        selector: CSS selector

    Returns:
        Text or empty string if nothing matches
    """
    if element is None:
        return ""

    matches = element.select(selector)
    return "".join(m.get_text() for m in matches).strip()


def child_attr(element: Optional[Tag], selector: str, attr: str) -> str:
    """
    Attribute of the first element matching selector, stripped.

    Args:
        element: Element to search within
        selector: CSS selector
        attr: Attribute name

    Returns:
        Attribute value or empty string if missing
    """
    if element is None:
        return ""

    match = element.select_one(selector)
    if match is None:
        return ""

    value = match.get(attr)
    if value is None:
        return ""
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip()


def clean_text(text: str) -> str:
    """Collapse whitespace runs into single spaces."""
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def parse_html(html: str) -> BeautifulSoup:
    """Parse HTML with the lxml backend."""
    return BeautifulSoup(html, "lxml")
