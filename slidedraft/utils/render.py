# slidedraft/utils/render.py
from __future__ import annotations

from typing import Mapping, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.text import Text

from ..models import RefinedSlide
from ..prompts.catalog import SlideRole
from ..render.review import unescape_newlines


def render_slides_preview(slides: Mapping[SlideRole, RefinedSlide], tone: str,
                          console: Optional[Console] = None) -> None:
    """
    Print each refined slide as a panel so the user can eyeball the draft
    before it opens in the editor.
    """
    console = console or Console()
    console.print(Panel.fit(f"[bold]Refined draft[/bold] ({tone})"))
    for role, slide in slides.items():
        body = unescape_newlines(slide.content_text) or "_(empty)_"
        console.print(
            Panel(Markdown(body), title=Text(slide.title_text, style="bold"), subtitle=role.value)
        )
