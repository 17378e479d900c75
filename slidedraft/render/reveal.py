from __future__ import annotations

import html
from pathlib import Path
from typing import Iterable

from ..models import RefinedSlide
from ..prompts.catalog import Tone

DEFAULT_REVEAL_BASE = "https://cdn.jsdelivr.net/npm/reveal.js@5.1.0"

THEMES = {
    Tone.PROFESSIONAL: "dist/theme/black.css",
    Tone.ENGAGING: "dist/theme/sky.css",
    Tone.ACADEMIC: "dist/theme/serif.css",
}

PAGE = """\
<!doctype html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<link rel="stylesheet" href="{base}/dist/reveal.css">
<link rel="stylesheet" href="{theme}" id="theme-style">
</head>
<body>
<div class="reveal">
<div class="slides">{slides}</div>
</div>
<script src="{base}/dist/reveal.js"></script>
<script>
Reveal.initialize({{
    hash: true,
    plugins: []
}});
</script>
</body>
</html>
"""


def theme_href(tone: Tone | str, reveal_base: str = DEFAULT_REVEAL_BASE) -> str:
    return f"{reveal_base.rstrip('/')}/{THEMES[Tone(tone)]}"


def slide_section(slide: RefinedSlide) -> str:
    """One <section> per slide; every non-blank content line is a list item."""
    items = "".join(
        f"<li>{html.escape(line.removeprefix('- '))}</li>"
        for line in slide.content_text.split("\n")
        if line.strip()
    )
    return f"<section><h2>{html.escape(slide.title_text)}</h2><ul>{items}</ul></section>"


def render_deck_html(slides: Iterable[RefinedSlide], tone: Tone | str,
                     reveal_base: str = DEFAULT_REVEAL_BASE) -> str:
    slides = list(slides)
    base = reveal_base.rstrip("/")
    return PAGE.format(
        title=html.escape(slides[0].title_text if slides else "Presentation"),
        base=base,
        theme=theme_href(tone, base),
        slides="".join(slide_section(s) for s in slides),
    )


def write_deck(path: str | Path, slides: Iterable[RefinedSlide], tone: Tone | str,
               reveal_base: str = DEFAULT_REVEAL_BASE) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(render_deck_html(slides, tone, reveal_base), encoding="utf-8")
    return out
