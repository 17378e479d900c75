from __future__ import annotations
import json

import click

from ..llm.factory import PROVIDERS, llm_settings
from ..prompts.catalog import Tone
from ..utils.config import debug_dump_config


@click.group(name="config")
def config_group():
    """Inspect and diagnose configuration."""
    pass


@config_group.command(name="show")
@click.pass_context
def show_config(ctx):
    """Print the active profile (redacted) and where it was loaded from."""
    cfg = (ctx.obj or {}).get("config", {})
    redacted = debug_dump_config(cfg)
    meta = redacted.get("_meta", {})
    click.secho("=== slidedraft config (redacted) ===", fg="cyan")
    click.echo(f"Source : {meta.get('source')}")
    click.echo(f"Path   : {meta.get('config_path')}")
    click.echo(f"Profile: {meta.get('profile')}")
    click.echo(json.dumps({k: v for k, v in redacted.items() if k != "_meta"}, indent=2, ensure_ascii=False))


@config_group.command(name="doctor")
@click.pass_context
def config_doctor(ctx):
    """Validate LLM settings and defaults."""
    cfg = (ctx.obj or {}).get("config", {})
    errs = []
    llm = llm_settings(cfg)
    provider = str(llm.get("provider") or "").strip().lower()
    if not provider:
        errs.append("No LLM provider configured (llm.provider or llm_provider)")
    elif provider not in PROVIDERS:
        errs.append(f"llm.provider invalid: {provider!r}")
    elif provider == "openai_compat":
        for k in ("api_base", "api_key", "model"):
            if not llm.get(k):
                errs.append(f"llm.{k} is required for provider=openai_compat")

    tone = cfg.get("tone")
    if tone and tone not in [t.value for t in Tone]:
        errs.append(f"tone invalid: {tone!r}")
    max_new_tokens = cfg.get("max_new_tokens")
    if max_new_tokens is not None and (not isinstance(max_new_tokens, int) or max_new_tokens <= 0):
        errs.append(f"max_new_tokens must be a positive integer, got {max_new_tokens!r}")

    if errs:
        click.echo(click.style("Config issues found:", fg="red"))
        for e in errs:
            click.echo(f" - {e}")
        click.echo("\nRun: slidedraft config show")
        raise SystemExit(2)

    click.echo(click.style("Config OK", fg="green"))
    click.echo(f"Loaded from: {cfg.get('_meta', {}).get('config_path')}")
