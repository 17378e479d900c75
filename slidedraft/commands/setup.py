from __future__ import annotations

import click

from ..prompts.catalog import Tone
from ..utils.config import (
    load_config,
    save_config,
    get_default_config_path,
)
from ..utils.log import info, success


@click.command(name="setup")
@click.option("--llm-provider", type=click.Choice(["ollama", "openai_compat"]), help="Self-hosted LLM provider")
@click.option("--model", help="Model name (e.g. 'mistral:latest' for Ollama or 'mistral-7b-instruct' for OpenAI-comp)")
@click.option("--ollama-base", help="Ollama base URL (default http://localhost:11434)")
@click.option("--api-base", help="OpenAI-compatible API base (e.g. http://localhost:8000/v1)")
@click.option("--api-key", help="API key for OpenAI-compatible provider")
@click.option("--tone", type=click.Choice([t.value for t in Tone]), help="Default tone for new decks")
@click.pass_context
def setup(
    ctx,
    llm_provider: str | None,
    model: str | None,
    ollama_base: str | None,
    api_base: str | None,
    api_key: str | None,
    tone: str | None,
):
    """
    Store LLM settings and the default tone in the config profile.
    Writes to ~/.config/slidedraft/config.toml by default.
    """
    obj = ctx.obj or {}
    config_path = obj.get("config_path")
    profile = obj.get("profile", "default")
    # load (so we can show current values when prompting)
    current = load_config(config_path, profile)

    updates: dict[str, str] = {}

    llm_provider = llm_provider or click.prompt(
        "LLM provider",
        type=click.Choice(["ollama", "openai_compat"]),
        default=current.get("llm_provider") or "ollama",
        show_default=True,
    )

    if llm_provider == "ollama":
        model = model or click.prompt(
            "Ollama model",
            default=current.get("model") or "mistral:latest",
            show_default=True,
        )
        ollama_base = ollama_base or click.prompt(
            "Ollama base URL",
            default=current.get("ollama_base") or "http://localhost:11434",
            show_default=True,
        )
        updates["llm_provider"] = "ollama"
        updates["model"] = model
        updates["ollama_base"] = ollama_base

    else:  # openai_compat
        api_base = api_base or click.prompt(
            "OpenAI-compatible API base",
            default=current.get("api_base") or "http://localhost:8000/v1",
            show_default=True,
        )
        api_key = api_key or click.prompt(
            "API key",
            default=current.get("api_key") or "",
            show_default=False,
            hide_input=True,
        )
        model = model or click.prompt(
            "Model name",
            default=current.get("model") or "mistral-7b-instruct",
            show_default=True,
        )
        updates["llm_provider"] = "openai_compat"
        updates["api_base"] = api_base
        updates["api_key"] = api_key
        updates["model"] = model

    tone = tone or click.prompt(
        "Default tone",
        type=click.Choice([t.value for t in Tone]),
        default=current.get("tone") or Tone.PROFESSIONAL.value,
        show_default=True,
    )
    updates["tone"] = tone

    # ---- Save ----
    target_path = config_path or str(get_default_config_path())
    save_config(target_path, profile, updates, replace_profile=False)

    # ---- Print summary (redacted) ----
    info(ctx, f"Saved profile [{profile}] to {target_path}")
    for k, v in updates.items():
        click.echo(f"  {k} = {'***' if k == 'api_key' and v else v}")

    success(ctx, "Done.")
