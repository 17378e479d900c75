from __future__ import annotations
from typing import List

from .base import BaseGenerator, Generation


class OllamaGenerator(BaseGenerator):
    def __init__(self, base_url: str = "http://localhost:11434", model: str = "mistral:latest",
                 temperature: float = 0.3, timeout: int = 120):
        super().__init__()
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.timeout = timeout

    def generate(self, prompt: str, *, max_new_tokens: int, **kwargs) -> List[Generation]:
        # Ollama expects: {"model": "...", "prompt": "...", "stream": false, "options": {...}}
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "num_predict": max_new_tokens,
                "temperature": kwargs.get("temperature", self.temperature),
            },
        }
        data = self._post(f"{self.base_url}/api/generate", payload)
        return [{"generated_text": data.get("response", "")}]

    def load(self) -> None:
        # a request without a prompt only loads the model into memory
        self._post(f"{self.base_url}/api/generate", {"model": self.model, "stream": False})
