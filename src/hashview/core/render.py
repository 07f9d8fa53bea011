"""Renderer dispatch: one HTML renderer per media variant, fed with fragment-derived state"""

from functools import lru_cache
from html import escape
from typing import Any, Callable

from markdown_it import MarkdownIt
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from hashview.core.models import (
    Classification,
    LineRange,
    MediaVariant,
    ViewContent,
    ViewFragmentState,
)


DEFAULT_PARSER_CONFIG = 'gfm-like'
CODE_CSS_CLASS = 'highlight'
BINARY_PLACEHOLDER = 'Cannot display binary content.'

Renderer = Callable[[Classification, ViewFragmentState, ViewContent, str], str]


@lru_cache(maxsize=8)
def make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name; raw HTML is escaped."""
    try:
        return MarkdownIt(preset, options_update={"linkify": False, "html": False})
    except KeyError as e:
        raise ValueError(f"Unknown markdown-it preset: {preset}") from e


def _make_lexer(language: str | None) -> Lexer:
    """Resolve a pygments lexer by alias, falling back to plain text."""
    try:
        return get_lexer_by_name(language or 'text', stripnl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False)


def _forwarded_url(content: ViewContent) -> str:
    """Reference URL with the raw fragment re-appended verbatim."""
    if content.raw_fragment:
        return f"{content.url}#{content.raw_fragment}"
    return content.url


def _scalar_text(value: Any) -> str:
    """Display text for a YAML scalar, keeping YAML spelling for booleans and null."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def _format_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ''.join(f'<span class="tag">{escape(_scalar_text(item))}</span>' for item in value)
    return escape(_scalar_text(value))


def highlighted_lines(fragment: ViewFragmentState, line_count: int) -> list[int]:
    """1-based line numbers receiving the highlight treatment; empty unless a LineRange."""
    if not isinstance(fragment, LineRange):
        return []
    return list(range(fragment.start, min(fragment.end, line_count) + 1))


def render_frontmatter(data: dict[str, Any]) -> str:
    """Metadata panel as a definition list; empty string when there is no metadata."""
    if not data:
        return ''
    rows = ''.join(
        f'<div class="meta-item"><dt>{escape(str(key))}</dt><dd>{_format_value(value)}</dd></div>'
        for key, value in data.items()
    )
    return f'<div class="metadata"><h2>Metadata</h2><dl>{rows}</dl></div>'


def render_image(classification, fragment, content, parser_config) -> str:
    alt = escape(content.filename or '', quote=True)
    return f'<img src="{escape(content.url, quote=True)}" alt="{alt}" class="media">'


def render_video(classification, fragment, content, parser_config) -> str:
    return f'<video src="{escape(_forwarded_url(content), quote=True)}" controls class="media"></video>'


def render_pdf(classification, fragment, content, parser_config) -> str:
    data = escape(_forwarded_url(content), quote=True)
    href = escape(content.url, quote=True)
    return (
        f'<object data="{data}" type="application/pdf" width="100%" height="1000px">'
        f'<p>This browser does not support PDFs. Please download the PDF to view it: '
        f'<a href="{href}">Download PDF</a></p></object>'
    )


def render_markdown(classification, fragment, content, parser_config) -> str:
    body = make_parser(parser_config).render(content.body)
    return f'<article class="prose">{render_frontmatter(content.frontmatter)}{body}</article>'


def render_code(classification, fragment, content, parser_config) -> str:
    text = content.text or ''
    formatter = HtmlFormatter(
        linenos='inline',
        hl_lines=highlighted_lines(fragment, len(text.splitlines())),
        cssclass=CODE_CSS_CLASS,
        wrapcode=True,
    )
    return highlight(text, _make_lexer(classification.language), formatter)


def render_unknown(classification, fragment, content, parser_config) -> str:
    if content.text is None:
        return f'<p class="placeholder">{BINARY_PLACEHOLDER}</p>'
    return f'<pre>{escape(content.text)}</pre>'


RENDERERS: dict[MediaVariant, Renderer] = {
    MediaVariant.image:    render_image,
    MediaVariant.video:    render_video,
    MediaVariant.pdf:      render_pdf,
    MediaVariant.markdown: render_markdown,
    MediaVariant.code:     render_code,
    MediaVariant.unknown:  render_unknown,
}


def render(
    classification: Classification,
    fragment: ViewFragmentState,
    content: ViewContent,
    parser_config: str = DEFAULT_PARSER_CONFIG,
    ) -> str:
    """Run exactly one renderer for the classified variant and return its HTML."""
    return RENDERERS[classification.variant](classification, fragment, content, parser_config)
