import click


def _obj(ctx) -> dict:
    ctx = ctx or click.get_current_context(silent=True)
    return ctx.obj if ctx and isinstance(ctx.obj, dict) else {}


def _should_print(ctx) -> bool:
    return not _obj(ctx).get("quiet", False)


def debug(ctx, msg: str):
    obj = _obj(ctx)
    if obj.get("verbose") and not obj.get("quiet"):
        click.secho(msg, fg="bright_black", err=True)


def info(ctx, msg: str):
    if _should_print(ctx):
        click.secho(msg, fg="cyan")


def warn(ctx, msg: str):
    if _should_print(ctx):
        click.secho(msg, fg="yellow", err=True)


def error(ctx, msg: str):
    click.secho(msg, fg="red", err=True)


def success(ctx, msg: str):
    if _should_print(ctx):
        click.secho(msg, fg="green")
