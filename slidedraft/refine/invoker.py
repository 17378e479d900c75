from __future__ import annotations

import asyncio
import json
from typing import Dict, Mapping

from ..llm.base import BaseGenerator
from ..llm.errors import EmptyGeneration
from ..models import RefinedSlide, SlideDraft
from ..prompts.catalog import SlideRole, Tone, resolve
from ..utils.log import debug, warn

DEFAULT_MAX_NEW_TOKENS = 100
FALLBACK_CONTENT = "AI failed to generate content. Please edit manually."


class DecodeError(ValueError):
    """Model output is not a JSON object."""


def build_prompt(tone: Tone | str, role: SlideRole | str, draft: SlideDraft) -> str:
    """Template, a blank line, then the draft as a JSON INPUT line."""
    template = resolve(tone, role)
    payload = json.dumps({"title": draft.title, "content": draft.content}, ensure_ascii=False)
    return f"{template}\n\nINPUT: {payload}"


def decode_slide(text: str) -> RefinedSlide:
    """
    Strictly parse model output. Only JSON syntax is checked: an object missing
    "title" or "content" still decodes, with None in the missing field.
    """
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError) as e:
        raise DecodeError(str(e)) from e
    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object, got {type(data).__name__}")
    return RefinedSlide(title=data.get("title"), content=data.get("content"))


class Refiner:
    """
    Rewrites slide drafts with a generation backend.

    The generator is passed in and shared by every call; nothing is cached, so
    identical drafts run inference again.
    """

    def __init__(self, generator: BaseGenerator, max_new_tokens: int = DEFAULT_MAX_NEW_TOKENS):
        self.generator = generator
        self.max_new_tokens = max_new_tokens

    async def refine(self, tone: Tone | str, role: SlideRole | str, draft: SlideDraft) -> RefinedSlide:
        prompt = build_prompt(tone, role, draft)
        debug(None, f"[{SlideRole(role).value}] prompt:\n{prompt}")

        output = await self.generator.agenerate(prompt, max_new_tokens=self.max_new_tokens)
        if not output:
            raise EmptyGeneration(f"no continuation returned for the {SlideRole(role).value} slide")
        text = output[0].get("generated_text", "")

        try:
            return decode_slide(text)
        except DecodeError:
            warn(None, f"Failed to parse AI output as JSON: {text!r}")
            return RefinedSlide(title=draft.title, content=FALLBACK_CONTENT)

    async def refine_deck(self, tone: Tone | str,
                          drafts: Mapping[SlideRole, SlideDraft]) -> Dict[SlideRole, RefinedSlide]:
        """
        Refine every draft concurrently. Any invocation failure fails the whole
        deck; decode failures are already absorbed per slide.
        """
        pending = [(SlideRole(role), draft) for role, draft in drafts.items()]
        results = await asyncio.gather(*(self.refine(tone, role, draft) for role, draft in pending))
        return {role: slide for (role, _), slide in zip(pending, results)}
