# slidedraft/commands/draft.py
from __future__ import annotations

import asyncio
import json
from typing import Dict, Any

import click

from ..utils.config import resolve_setting
from ..utils.log import info, error, success
from ..utils.render import render_slides_preview
from ..llm.errors import InvocationError
from ..llm.factory import build_generator
from ..models import SlideDraft, RefinedSlide
from ..prompts.catalog import ROLES, SlideRole, Tone
from ..refine.invoker import DEFAULT_MAX_NEW_TOKENS, Refiner
from ..render.review import parse_review_text, to_review_text, unescape_newlines
from ..render.reveal import DEFAULT_REVEAL_BASE, write_deck

TONES = [t.value for t in Tone]


def resolve_tone(value: str) -> Tone:
    """Tone from a CLI option or profile value; a bad profile value is a usage error."""
    try:
        return Tone(value)
    except ValueError:
        raise click.UsageError(f"Unknown tone {value!r}. Use one of: {', '.join(TONES)}.")


def _editor_edit(initial_text: str) -> str:
    """Open $EDITOR with initial_text; return edited text (or initial if editor was closed without save)."""
    edited = click.edit(initial_text, extension=".md")
    return edited if edited is not None else initial_text


def load_drafts(path: str) -> Dict[SlideRole, SlideDraft]:
    """
    Read drafts from JSON, either {"opener": {...}, "core": {...}, "closer": {...}}
    or a list of three {title, content} objects in deck order.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise click.UsageError(f"{path}: invalid JSON ({e})")
    if isinstance(data, list):
        if len(data) != len(ROLES):
            raise click.UsageError(f"{path}: expected {len(ROLES)} slides, got {len(data)}")
        return {role: SlideDraft.from_dict(item) for role, item in zip(ROLES, data)}
    if isinstance(data, dict):
        missing = [r.value for r in ROLES if r.value not in data]
        if missing:
            raise click.UsageError(f"{path}: missing slides {', '.join(missing)}")
        return {role: SlideDraft.from_dict(data[role.value]) for role in ROLES}
    raise click.UsageError(f"{path}: expected a JSON object or list")


def prompt_drafts() -> Dict[SlideRole, SlideDraft]:
    drafts = {}
    for i, role in enumerate(ROLES, start=1):
        click.echo(f"\n--- Slide {i} ({role.value}) ---")
        title = click.prompt("Title", type=str, default="", show_default=False)
        content = click.prompt("Content", type=str, default="", show_default=False)
        drafts[role] = SlideDraft(title=title, content=content)
    return drafts


@click.command(name="draft")
@click.option("--tone", type=click.Choice(TONES), default=None, help="Tone for all three slides (default: profile tone or Professional)")
@click.option("--input", "input_path", type=click.Path(exists=True, dir_okay=False), default=None,
              help="JSON file with the three drafts (otherwise you will be asked)")
@click.option("--output", default=None, help="Where to write the deck HTML (default: deck.html)")
@click.option("--max-new-tokens", type=int, default=None, help="Generation budget per slide")
@click.option("--reveal-base", default=None, help="Base URL of the reveal.js distribution")
@click.option("--no-review", is_flag=True, help="Skip the $EDITOR review step")
@click.pass_context
def draft(ctx, tone, input_path, output, max_new_tokens, reveal_base, no_review):
    """
    Sketch an opener, a core and a closer slide, let the model polish them,
    review the result in $EDITOR, then render a reveal.js deck.
    """
    cfg: Dict[str, Any] = (ctx.obj or {}).get("config", {})
    json_mode = (ctx.obj or {}).get("json", False)

    tone = resolve_tone(resolve_setting("tone", tone, cfg, Tone.PROFESSIONAL.value))
    max_new_tokens = int(resolve_setting("max_new_tokens", max_new_tokens, cfg, DEFAULT_MAX_NEW_TOKENS))
    reveal_base = resolve_setting("reveal_base", reveal_base, cfg, DEFAULT_REVEAL_BASE)
    output = resolve_setting("output", output, cfg, "deck.html")

    drafts = load_drafts(input_path) if input_path else prompt_drafts()

    generator = build_generator(cfg)
    refiner = Refiner(generator, max_new_tokens=max_new_tokens)

    info(ctx, "Loading AI model...")
    try:
        generator.load()
        info(ctx, f"Generating {tone.value} draft...")
        refined = asyncio.run(refiner.refine_deck(tone, drafts))
    except InvocationError as e:
        error(ctx, f"An error occurred while generating the draft. Please try again. ({e})")
        ctx.exit(1)

    if json_mode:
        click.echo(json.dumps({r.value: s.to_dict() for r, s in refined.items()}, indent=2, ensure_ascii=False))
    elif not (ctx.obj or {}).get("quiet"):
        render_slides_preview(refined, tone.value)

    if no_review:
        final = {
            role: RefinedSlide(title=slide.title, content=unescape_newlines(slide.content_text))
            for role, slide in refined.items()
        }
    else:
        click.echo("\n--- Review (edit in your editor) ---")
        final = _review(to_review_text(refined))

    path = write_deck(output, [final[r] for r in ROLES], tone, reveal_base)
    success(ctx, f"Wrote {path}")


def _review(text: str) -> Dict[SlideRole, RefinedSlide]:
    while True:
        text = _editor_edit(text)
        try:
            return parse_review_text(text)
        except click.UsageError as e:
            if not click.confirm(f"{e.message}. Edit again?", default=True):
                raise
