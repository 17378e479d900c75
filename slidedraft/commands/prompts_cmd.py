from __future__ import annotations

import json

import click

from ..prompts.catalog import ROLES, Tone, iter_templates, resolve


@click.group(name="prompts")
def prompts_group():
    """Inspect the tone/role prompt catalog."""
    pass


@prompts_group.command(name="list")
@click.pass_context
def list_prompts(ctx):
    """List every tone and slide role with its template."""
    if (ctx.obj or {}).get("json"):
        out = [{"tone": t.value, "role": r.value, "template": tpl} for t, r, tpl in iter_templates()]
        click.echo(json.dumps(out, indent=2, ensure_ascii=False))
        return
    for tone, role, template in iter_templates():
        click.secho(f"{tone.value} / {role.value}", fg="cyan", bold=True)
        click.echo(f"  {template}\n")


@prompts_group.command(name="show")
@click.option("--tone", type=click.Choice([t.value for t in Tone]), required=True)
@click.option("--role", type=click.Choice([r.value for r in ROLES]), required=True)
def show_prompt(tone, role):
    """Print one template exactly as it is sent to the model."""
    click.echo(resolve(tone, role))
