import json

import click

from ..models import RefinedSlide
from ..prompts.catalog import ROLES, Tone
from ..render.reveal import DEFAULT_REVEAL_BASE, write_deck
from ..utils.config import resolve_setting
from ..utils.log import info, success
from .draft import resolve_tone


def load_slides(path: str) -> list[RefinedSlide]:
    """
    Read slides from JSON: a list of {title, content} objects, or the
    role-keyed object printed by `draft --json`, rendered in deck order.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise click.UsageError(f"{path}: invalid JSON ({e})")

    if isinstance(data, dict):
        missing = [r.value for r in ROLES if r.value not in data]
        if missing:
            raise click.UsageError(f"{path}: missing slides {', '.join(missing)}")
        data = [data[r.value] for r in ROLES]
    elif not isinstance(data, list):
        raise click.UsageError(f"{path}: expected a JSON object or list")

    slides = []
    for i, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            raise click.UsageError(f"{path}: slide {i} must be an object with title and content")
        slides.append(RefinedSlide(title=item.get("title"), content=item.get("content")))
    return slides


@click.command(name="render")
@click.option('--input', 'input_path', type=click.Path(exists=True, dir_okay=False), required=True,
              help='JSON list of {title, content} slides, or the role-keyed output of `draft --json`')
@click.option('--output', 'html_file', required=True, type=str)
@click.option('--tone', type=click.Choice([t.value for t in Tone]), default=None)
@click.option('--reveal-base', default=None)
@click.pass_context
def render_only(ctx, input_path, html_file, tone, reveal_base):
    """Render reviewed slides to a reveal.js deck, no model involved."""
    cfg = (ctx.obj or {}).get("config", {})
    tone = resolve_tone(resolve_setting("tone", tone, cfg, Tone.PROFESSIONAL.value))
    reveal_base = resolve_setting("reveal_base", reveal_base, cfg, DEFAULT_REVEAL_BASE)

    slides = load_slides(input_path)

    info(ctx, f"Rendering: {input_path} → {html_file}")
    write_deck(html_file, slides, tone, reveal_base)
    success(ctx, f"Wrote {html_file}")
