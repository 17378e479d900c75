from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SlideDraft:
    """Raw, user-authored slide text before refinement."""
    title: str
    content: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SlideDraft":
        return cls(title=str(data.get("title") or ""), content=str(data.get("content") or ""))


@dataclass(frozen=True)
class RefinedSlide:
    """
    What the model claimed as the rewrite of one draft.

    Fields are whatever the decoded JSON carried; a missing key shows up as None.
    """
    title: Optional[Any] = None
    content: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def title_text(self) -> str:
        return "" if self.title is None else str(self.title)

    @property
    def content_text(self) -> str:
        return "" if self.content is None else str(self.content)
