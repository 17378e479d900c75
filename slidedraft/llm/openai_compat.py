from __future__ import annotations
from typing import List

from .base import BaseGenerator, Generation


class OpenAICompatGenerator(BaseGenerator):
    def __init__(self, api_base: str, api_key: str, model: str,
                 temperature: float = 0.3, timeout: int = 60):
        super().__init__()
        self.api_base = api_base.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self.headers["Authorization"] = f"Bearer {self.api_key}"

    def generate(self, prompt: str, *, max_new_tokens: int, **kwargs) -> List[Generation]:
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": kwargs.get("temperature", self.temperature),
            "max_tokens": max_new_tokens,
            "n": kwargs.get("n", 1),
            "stream": False,
        }
        data = self._post(f"{self.api_base}/chat/completions", payload)
        return [
            {"generated_text": (choice.get("message") or {}).get("content") or ""}
            for choice in data.get("choices", [])
        ]
