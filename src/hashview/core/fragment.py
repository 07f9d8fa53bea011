"""URL fragment parsing into typed view state, and viewer URL splitting"""

import re
from typing import Optional
from urllib.parse import parse_qs, unquote, urlsplit

from hashview.core.models import LineRange, NoFragment, PageNumber, SeekTime, ViewFragmentState


TIME_RE = re.compile(r't=([\w.=]+)', re.ASCII)
PAGE_RE = re.compile(r'page=(\d+)', re.ASCII)
LINE_RE = re.compile(r'L(\d+)(?:-L(\d+))?', re.ASCII)

IDENTIFIER_PARAMS = ('hash', 'id')
VIEWER_SEGMENTS = {'', 'view', 'md5'}


def _seek_time(raw: str) -> Optional[ViewFragmentState]:
    m = TIME_RE.fullmatch(raw)
    return SeekTime(m.group(1)) if m else None


def _page_number(raw: str) -> Optional[ViewFragmentState]:
    m = PAGE_RE.fullmatch(raw)
    if m is None:
        return None
    number = int(m.group(1))
    return PageNumber(number) if number >= 1 else None


def _line_range(raw: str) -> Optional[ViewFragmentState]:
    m = LINE_RE.fullmatch(raw)
    if m is None:
        return None
    start = int(m.group(1))
    end = int(m.group(2)) if m.group(2) else start
    if start < 1 or end < start:
        return None
    return LineRange(start, end)


# Precedence matters: t= before page= before L<n>.
_GRAMMARS = (_seek_time, _page_number, _line_range)


def parse_fragment(raw: str) -> ViewFragmentState:
    """Map a raw fragment (without '#') to exactly one view state. Never raises."""
    for grammar in _GRAMMARS:
        state = grammar(raw or '')
        if state is not None:
            return state
    return NoFragment()


def split_view_url(target: str) -> tuple[Optional[str], str]:
    """Split a viewer URL, content URL or bare identifier into (identifier, raw fragment).

    Accepted forms:
      http://host/view?hash=<id>#L10     query parameter 'hash' (or 'id')
      http://host/content/<id>#page=2    last path segment
      <id>#t=5                           bare identifier
    Returns None as the identifier when none can be found.
    """
    target = (target or '').strip()
    base, _, fragment = target.partition('#')
    parts = urlsplit(base)

    if parts.query:
        params = parse_qs(parts.query)
        for name in IDENTIFIER_PARAMS:
            if params.get(name):
                return params[name][0], fragment
        return None, fragment

    if parts.scheme or parts.netloc:
        segment = unquote(parts.path.rstrip('/').rsplit('/', 1)[-1])
        return (None if segment in VIEWER_SEGMENTS else segment), fragment

    return (base or None), fragment
