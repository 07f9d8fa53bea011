"""Front-matter extraction: split a leading YAML block from Markdown body text"""

import logging
import re

import yaml

from hashview.core.models import ParsedMarkdown


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(
    r'^---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|$)',
    re.DOTALL,
)
BOM = "\ufeff"


def extract_frontmatter(text: str) -> ParsedMarkdown:
    """Return (frontmatter, body) with the YAML header removed.

    A missing, malformed or non-mapping header leaves the text untouched and
    yields an empty mapping.
    """
    # A leading BOM is not part of the opening marker.
    unmarked = text[1:] if text.startswith(BOM) else text
    m = FRONTMATTER_RE.match(unmarked)
    if m is None:
        return ParsedMarkdown(frontmatter={}, body=text)

    try:
        fm = yaml.safe_load(m.group(1) or '')
    except yaml.YAMLError as e:
        logger.debug("Ignoring invalid YAML frontmatter: %s", e)
        return ParsedMarkdown(frontmatter={}, body=text)

    if fm is None:
        fm = {}
    if not isinstance(fm, dict):
        logger.debug("Ignoring frontmatter: expected a mapping, got %s", type(fm).__name__)
        return ParsedMarkdown(frontmatter={}, body=text)
    return ParsedMarkdown(frontmatter={str(k): v for k, v in fm.items()}, body=unmarked[m.end():])
