"""Splits message text into alternating prose and code segments.

Hides the fence syntax: callers only see ordered ``MessageSegment``s.
"""

from .models import MessageSegment

FENCE = "```"


def _split_code(part: str) -> tuple[str | None, str]:
    """Separate the language tag line from a code block body."""
    if "\n" not in part:
        return None, part
    first_line, body = part.split("\n", 1)
    language = first_line.strip() or None
    return language, body


def parse_segments(text: str) -> list[MessageSegment]:
    """Split text on code fences.

    Text before the first fence is prose, text between the first and second
    fence is code, and so on. An unclosed fence leaves the rest as code.
    The first line of a code part is its language tag; a code part with no
    newline (```ls -la``` or ```python```) has no tag and is all body.
    Segments that are blank after trimming are dropped; the message as a
    whole is trimmed, so inner segments keep their surrounding whitespace.

    Example:
        >>> [(s.text, s.is_code) for s in parse_segments("before ```python\\nprint(1)\\n``` after")]
        [('before ', False), ('print(1)\\n', True), (' after', False)]
    """
    segments: list[MessageSegment] = []

    for index, part in enumerate(text.strip().split(FENCE)):
        if not part.strip():
            continue

        if index % 2 == 0:
            segments.append(MessageSegment(id=len(segments), text=part))
            continue

        language, body = _split_code(part)
        if not body.strip():
            continue
        segments.append(
            MessageSegment(id=len(segments), text=body, is_code=True, language=language)
        )

    return segments


def code_blocks(text: str) -> list[MessageSegment]:
    """Return only the code segments of a message."""
    return [segment for segment in parse_segments(text) if segment.is_code]
