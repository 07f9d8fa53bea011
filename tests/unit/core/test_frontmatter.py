"""Unit tests for core/frontmatter.py"""

import datetime

import pytest

from hashview.core.frontmatter import extract_frontmatter


def test_extract_frontmatter_yaml(sample_markdown):
    """Scalars and lists are parsed; the body starts after the closing marker."""
    parsed = extract_frontmatter(sample_markdown)
    assert parsed.frontmatter == {"title": "Release Notes", "tags": ["viewer", "fragments"]}
    assert parsed.body == "# Changes\n\nBody text.\n"


def test_extract_frontmatter_body_is_exact():
    body = "\n# Heading\n\nParagraph with --- dashes.\n"
    parsed = extract_frontmatter("---\ntitle: Hello\n---\n" + body)
    assert parsed.frontmatter == {"title": "Hello"}
    assert parsed.body == body


def test_extract_frontmatter_no_frontmatter():
    """No header: empty mapping and the full text unchanged."""
    text = "# No frontmatter\n"
    parsed = extract_frontmatter(text)
    assert parsed.frontmatter == {}
    assert parsed.body == text


def test_extract_frontmatter_idempotent(sample_markdown):
    """Re-extracting a returned body yields no metadata and the same body."""
    first = extract_frontmatter(sample_markdown)
    second = extract_frontmatter(first.body)
    assert second.frontmatter == {}
    assert second.body == first.body


def test_extract_frontmatter_closing_marker_at_end():
    parsed = extract_frontmatter("---\ntitle: Only\n---")
    assert parsed.frontmatter == {"title": "Only"}
    assert parsed.body == ""


def test_extract_frontmatter_empty_block():
    parsed = extract_frontmatter("---\n---\nBody\n")
    assert parsed.frontmatter == {}
    assert parsed.body == "Body\n"


def test_extract_frontmatter_crlf():
    parsed = extract_frontmatter("---\r\ntitle: Win\r\n---\r\nBody\r\n")
    assert parsed.frontmatter == {"title": "Win"}
    assert parsed.body == "Body\r\n"


def test_extract_frontmatter_marker_not_at_start():
    """A marker that is not the very first line is body text."""
    text = "Intro\n---\ntitle: x\n---\n"
    parsed = extract_frontmatter(text)
    assert parsed.frontmatter == {}
    assert parsed.body == text


def test_extract_frontmatter_unclosed_block():
    text = "---\ntitle: x\nno closing marker\n"
    parsed = extract_frontmatter(text)
    assert parsed.frontmatter == {}
    assert parsed.body == text


@pytest.mark.parametrize("header", [
    "key: [unclosed",
    "is this even a key?\n  - nope: [",
    "- just\n- a list",
    "plain scalar",
])
def test_extract_frontmatter_malformed_is_absent(header):
    """Invalid YAML or a non-mapping header is ignored, text preserved verbatim."""
    text = f"---\n{header}\n---\n# Body\n"
    parsed = extract_frontmatter(text)
    assert parsed.frontmatter == {}
    assert parsed.body == text


def test_extract_frontmatter_keeps_yaml_types():
    parsed = extract_frontmatter("---\ndate: 2026-01-15\ndraft: true\ncount: 3\n---\nx\n")
    assert parsed.frontmatter == {"date": datetime.date(2026, 1, 15), "draft": True, "count": 3}


def test_extract_frontmatter_leading_bom():
    """A byte-order mark before the opening marker does not hide the header."""
    parsed = extract_frontmatter("\ufeff---\ntitle: x\n---\nBody\n")
    assert parsed.frontmatter == {"title": "x"}
    assert parsed.body == "Body\n"


def test_extract_frontmatter_bom_without_block():
    text = "\ufeff# Just a heading\n"
    parsed = extract_frontmatter(text)
    assert parsed.frontmatter == {}
    assert parsed.body == text
