"""Text formatting utilities for the TUI and CLI.

Hides the details of markdown rendering and code highlighting.
"""

from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound
from rich.console import Group, RenderableType
from rich.markdown import Markdown
from rich.syntax import Syntax
from rich.text import Text

from ..chat import MessageSegment, parse_segments

PLAIN_LEXER = "text"
CODE_THEME = "monokai"


def resolve_lexer(language: str | None) -> str:
    """Map a fence language tag to a pygments lexer alias.

    Unknown or missing tags fall back to plain text.
    """
    if not language:
        return PLAIN_LEXER
    tag = language.strip().lower()
    try:
        get_lexer_by_name(tag)
    except ClassNotFound:
        return PLAIN_LEXER
    return tag


def highlight_code(code: str, language: str | None = None, theme: str = CODE_THEME) -> Syntax:
    """Highlight code using the lexer named by its fence tag."""
    return Syntax(
        code.rstrip("\n"),
        resolve_lexer(language),
        theme=theme,
        word_wrap=True,
        background_color="default",
    )


def render_markdown(text: str) -> Markdown:
    """Render prose as markdown."""
    return Markdown(text)


def render_segment(segment: MessageSegment) -> RenderableType:
    """Render one segment: code is highlighted, prose goes through markdown."""
    if segment.is_code:
        return highlight_code(segment.text, segment.language)
    return render_markdown(segment.text.strip())


def render_message(content: str) -> RenderableType:
    """Render full message text as a group of segment renderables."""
    segments = parse_segments(content)
    if not segments:
        return Text("")
    return Group(*(render_segment(segment) for segment in segments))


def segment_label(segment: MessageSegment) -> str:
    """Short label for a segment, e.g. ``code (python)`` or ``text``."""
    if segment.is_code:
        return f"code ({segment.language or PLAIN_LEXER})"
    return "text"
