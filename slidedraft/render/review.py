from __future__ import annotations

import re
from typing import Dict, Mapping

import click

from ..models import RefinedSlide
from ..prompts.catalog import ROLES, SlideRole

HEADER_RE = re.compile(r"^##\s+(\w+)\s*$")
TITLE_PREFIX = "Title:"


def unescape_newlines(text: str) -> str:
    """Models often emit a literal backslash-n instead of a newline."""
    return text.replace("\\n", "\n")


def to_review_text(slides: Mapping[SlideRole, RefinedSlide]) -> str:
    """
    Render refined slides as editable text:

        ## opener
        Title: ...
        content lines
    """
    blocks = []
    for role in ROLES:
        slide = slides.get(role)
        if slide is None:
            continue
        content = unescape_newlines(slide.content_text).strip("\n")
        # the title must stay on its one line
        title = " ".join(slide.title_text.split())
        block = f"## {role.value}\n{TITLE_PREFIX} {title}\n"
        if content:
            block += content + "\n"
        blocks.append(block)
    return "\n".join(blocks)


def _heading_role(word: str):
    try:
        return SlideRole(word.lower())
    except ValueError:
        return None


def parse_review_text(text: str) -> Dict[SlideRole, RefinedSlide]:
    """Inverse of to_review_text. Every role must appear exactly once."""
    parsed: Dict[SlideRole, Dict[str, list]] = {}
    current = None
    for line in text.splitlines():
        m = HEADER_RE.match(line)
        role = _heading_role(m.group(1)) if m else None
        if m and role is None and current is not None:
            # a markdown heading inside slide content
            parsed[current]["content"].append(line.rstrip())
            continue
        if m:
            if role is None:
                raise click.UsageError(f"Unknown slide heading: {line.strip()!r}")
            current = role
            if current in parsed:
                raise click.UsageError(f"Slide '{current.value}' appears more than once")
            parsed[current] = {"title": [], "content": []}
            continue
        if current is None:
            if line.strip():
                raise click.UsageError(f"Text before the first slide heading: {line.strip()!r}")
            continue
        if line.startswith(TITLE_PREFIX) and not parsed[current]["title"]:
            parsed[current]["title"].append(line[len(TITLE_PREFIX):].strip())
        else:
            parsed[current]["content"].append(line.rstrip())

    missing = [r.value for r in ROLES if r not in parsed]
    if missing:
        raise click.UsageError(f"Review is missing slides: {', '.join(missing)}")

    return {
        role: RefinedSlide(
            title="".join(parsed[role]["title"]),
            content="\n".join(parsed[role]["content"]).strip("\n"),
        )
        for role in ROLES
    }
