# slidedraft/cli.py
from __future__ import annotations

import click

from .utils.config import CONFIG_ENV, load_config
from .commands.setup import setup
from .commands.config_cmd import config_group
from .commands.prompts_cmd import prompts_group
from .commands.draft import draft
from .commands.render_cmd import render_only


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_path",
    envvar=CONFIG_ENV,
    type=click.Path(path_type=str),
    help="Path to config TOML (default: ~/.config/slidedraft/config.toml)",
)
@click.option(
    "--profile",
    default="default",
    show_default=True,
    help="Config profile name in the TOML file",
)
@click.option(
    "--verbose/--no-verbose",
    default=False,
    show_default=True,
    help="Verbose logging (prints the prompts sent to the model)",
)
@click.option(
    "--quiet/--no-quiet",
    default=False,
    show_default=True,
    help="Suppress non-error output",
)
@click.option(
    "--json/--no-json",
    "json_mode",
    default=False,
    show_default=True,
    help="Output in JSON where supported",
)
@click.version_option(package_name="slidedraft", prog_name="slidedraft")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, profile: str,
        verbose: bool, quiet: bool, json_mode: bool):
    """
    slidedraft: turn three rough slide ideas into a polished reveal.js deck
    with a locally hosted language model.
    """
    cfg = load_config(config_path, profile)

    # shared context for subcommands
    ctx.ensure_object(dict)
    ctx.obj.update(
        {
            "config": cfg,
            "verbose": verbose,
            "quiet": quiet,
            "json": json_mode,
            "profile": profile,
            "config_path": config_path,
        }
    )


# ---- Subcommands ----
cli.add_command(setup)            # slidedraft setup
cli.add_command(config_group)     # slidedraft config show|doctor
cli.add_command(prompts_group)    # slidedraft prompts list|show
cli.add_command(draft)            # slidedraft draft ...
cli.add_command(render_only)      # slidedraft render ...


if __name__ == "__main__":
    cli()
