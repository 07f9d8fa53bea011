"""Standalone HTML page wrapping a view state"""

from html import escape

from pygments.formatters import HtmlFormatter

from hashview.core.models import Error, Ready, ViewState
from hashview.core.render import CODE_CSS_CLASS


THEME_STYLES = {'light': 'default', 'dark': 'monokai'}

BASE_CSS = """\
body { font-family: system-ui, sans-serif; margin: 0; }
.container { max-width: 72rem; margin: 0 auto; padding: 1rem; }
.media { display: block; max-width: 100%; height: auto; margin: 0 auto; }
.metadata { margin-bottom: 1.5rem; padding: 1rem; border: 1px solid #ccc; border-radius: .5rem; }
.metadata dl { display: grid; grid-template-columns: repeat(auto-fit, minmax(16rem, 1fr)); gap: .5rem 1rem; }
.metadata dt { font-size: .875rem; opacity: .7; }
.metadata dd { margin: .25rem 0 0; }
.tag { display: inline-block; border-radius: 9999px; padding: .25rem .75rem; margin: 0 .5rem .5rem 0; background: rgba(127, 127, 127, .2); }
.highlight .hll { display: block; }
"""

DARK_CSS = "body { background: #1e1e1e; color: #ddd; }\n"


def page_css(theme: str = 'light') -> str:
    """Base layout CSS plus the pygments style for the chosen theme."""
    style = THEME_STYLES.get(theme, THEME_STYLES['light'])
    code_css = HtmlFormatter(style=style).get_style_defs(f'.{CODE_CSS_CLASS}')
    dark = DARK_CSS if theme == 'dark' else ''
    return f"{BASE_CSS}{dark}{code_css}\n"


def _title(state: ViewState, app_name: str) -> str:
    if isinstance(state, Ready) and state.filename:
        return f"{state.filename} - {app_name}"
    return app_name


def _body(state: ViewState) -> str:
    if isinstance(state, Ready):
        return state.html
    if isinstance(state, Error):
        return f'<div class="error">Error: {escape(state.message)}</div>'
    return '<div class="loading">Loading...</div>'


def build_page(state: ViewState, app_name: str = 'hashview', theme: str = 'light') -> str:
    """Return a complete HTML document for any view state."""
    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n<meta charset=\"utf-8\">\n"
        f"<title>{escape(_title(state, app_name))}</title>\n"
        f"<style>\n{page_css(theme)}</style>\n"
        "</head>\n<body>\n"
        f"<div class=\"container\">{_body(state)}</div>\n"
        "</body>\n</html>\n"
    )
