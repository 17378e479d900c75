from __future__ import annotations

from typing import Any, Dict

import click

from .base import BaseGenerator
from .ollama import OllamaGenerator
from .openai_compat import OpenAICompatGenerator

PROVIDERS = ("ollama", "openai_compat")


def llm_settings(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge the nested [<profile>.llm] table over flat profile keys (llm_provider, model, ...).
    """
    llm = cfg.get("llm") if isinstance(cfg.get("llm"), dict) else {}
    merged: Dict[str, Any] = {
        "provider": cfg.get("llm_provider"),
        "model": cfg.get("model"),
        "ollama_base": cfg.get("ollama_base"),
        "api_base": cfg.get("api_base"),
        "api_key": cfg.get("api_key"),
        "temperature": cfg.get("temperature"),
        "timeout": cfg.get("timeout"),
    }
    for k, v in llm.items():
        if v not in (None, ""):
            merged[k] = v
    return merged


def build_generator(cfg: Dict[str, Any]) -> BaseGenerator:
    s = llm_settings(cfg)
    provider = str(s.get("provider") or "").strip().lower()

    if not provider:
        raise click.UsageError(
            "No LLM configured. Run `slidedraft setup`, or add either:\n\n"
            "[<profile>.llm]\nprovider = 'ollama'\nmodel = 'mistral:latest'\nollama_base = 'http://localhost:11434'\n\n"
            "OR\n\n"
            "[<profile>.llm]\nprovider = 'openai_compat'\napi_base = 'http://localhost:8000/v1'\napi_key = '...'\nmodel = 'mistral-7b-instruct'\n\n"
            "Flat keys also supported inside the profile: llm_provider, model, ollama_base / api_base, api_key."
        )

    extra: Dict[str, Any] = {}
    if s.get("temperature") not in (None, ""):
        extra["temperature"] = float(s["temperature"])
    if s.get("timeout") not in (None, ""):
        extra["timeout"] = int(s["timeout"])

    if provider == "ollama":
        base = str(s.get("ollama_base") or "http://localhost:11434").strip()
        model = str(s.get("model") or "mistral:latest").strip()
        return OllamaGenerator(base_url=base, model=model, **extra)

    if provider == "openai_compat":
        api_base = str(s.get("api_base") or "").strip()
        api_key = str(s.get("api_key") or "").strip()
        model = str(s.get("model") or "").strip()
        missing = [k for k, v in [("api_base", api_base), ("api_key", api_key), ("model", model)] if not v]
        if missing:
            raise click.UsageError(f"provider=openai_compat requires: {', '.join(missing)}")
        return OpenAICompatGenerator(api_base=api_base, api_key=api_key, model=model, **extra)

    raise click.UsageError(f"Unknown llm.provider {provider!r}. Use 'openai_compat' or 'ollama'.")
