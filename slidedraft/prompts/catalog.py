from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Iterator, Tuple


class Tone(str, Enum):
    PROFESSIONAL = "Professional"
    ENGAGING = "Engaging"
    ACADEMIC = "Academic"


class SlideRole(str, Enum):
    OPENER = "opener"
    CORE = "core"
    CLOSER = "closer"


# Deck order
ROLES = (SlideRole.OPENER, SlideRole.CORE, SlideRole.CLOSER)

CONTEXT = {
    Tone.PROFESSIONAL: "You are an AI assistant refining content for a professional business presentation.",
    Tone.ENGAGING: "You are an AI assistant creating an engaging, story-driven presentation.",
    Tone.ACADEMIC: "You are an AI assistant structuring an academic or formal presentation.",
}

TASK = {
    (Tone.PROFESSIONAL, SlideRole.OPENER): (
        "Rewrite the following statement into a clear and impactful opening slide title "
        "and a single, concise hook sentence."
    ),
    (Tone.PROFESSIONAL, SlideRole.CORE): (
        "Convert the following raw points into three distinct, professional bullet points. "
        "Each bullet should be a complete sentence."
    ),
    (Tone.PROFESSIONAL, SlideRole.CLOSER): (
        "Synthesize the following text into a concluding slide title "
        "and a clear, single-sentence call to action."
    ),
    (Tone.ENGAGING, SlideRole.OPENER): (
        "Turn the following idea into a catchy, question-based title "
        "and a single, intriguing opening sentence."
    ),
    (Tone.ENGAGING, SlideRole.CORE): (
        "Transform the following points into three conversational, easy-to-understand bullet points. "
        "Use compelling language."
    ),
    (Tone.ENGAGING, SlideRole.CLOSER): (
        "Frame the following conclusion as a powerful final thought "
        "and a simple, motivating next step for the audience."
    ),
    (Tone.ACADEMIC, SlideRole.OPENER): (
        "Formulate the following topic into a formal title "
        "and a concise thesis statement for the first slide."
    ),
    (Tone.ACADEMIC, SlideRole.CORE): (
        "Organize the following points into three clear, data-driven, "
        "and logically structured bullet points for a formal slide."
    ),
    (Tone.ACADEMIC, SlideRole.CLOSER): (
        "Summarize the following points into a formal concluding title "
        "and a statement on future implications or further research."
    ),
}

# The "\\n" stays as two characters so the model sees an escaped newline in the JSON example.
OUTPUT = {
    SlideRole.OPENER: '{"title": "...", "content": "..."}',
    SlideRole.CORE: '{"title": "...", "content": "- ...\\n- ...\\n- ..."}',
    SlideRole.CLOSER: '{"title": "...", "content": "..."}',
}

PROMPTS = MappingProxyType({
    (tone, role): f"CONTEXT: {CONTEXT[tone]} TASK: {task} OUTPUT: {OUTPUT[role]}"
    for (tone, role), task in TASK.items()
})


def resolve(tone: Tone | str, role: SlideRole | str) -> str:
    """
    Return the instruction template for a (tone, role) pair.

    Plain strings are coerced through the enums, so an unknown value raises ValueError.
    """
    return PROMPTS[(Tone(tone), SlideRole(role))]


def iter_templates() -> Iterator[Tuple[Tone, SlideRole, str]]:
    for tone in Tone:
        for role in ROLES:
            yield tone, role, resolve(tone, role)
