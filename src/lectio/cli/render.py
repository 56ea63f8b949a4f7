# ABOUTME: Rich rendering helpers shared by the reader commands.
# ABOUTME: Shows `{...}` emphasis spans in italics and formats verse references.

import re

from rich.text import Text

from lectio.canon import localized_name

_EMPHASIS_RE = re.compile(r"\{(.*?)\}")


def verse_text(text: str, *, style: str = "") -> Text:
    """Render verse text, italicising `{...}` spans and dropping their braces.

    Built as a Text object so square brackets in scripture are never read as
    Rich markup.
    """
    rendered = Text(style=style)
    position = 0
    for match in _EMPHASIS_RE.finditer(text):
        rendered.append(text[position:match.start()])
        rendered.append(match.group(1), style="italic")
        position = match.end()
    rendered.append(text[position:])
    return rendered


def reference(book: str, chapter: int, verses: str | int | None = None, version: str = "") -> str:
    """Format "Genesis 1:3" / "Genèse 1:3-5", localizing the book for `version`."""
    name = localized_name(book, version) if version else book
    ref = f"{name} {chapter}"
    return f"{ref}:{verses}" if verses is not None else ref
