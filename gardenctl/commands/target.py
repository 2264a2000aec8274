import typer
import yaml

from gardenctl.commands.completion import complete_garden, complete_project, complete_seed, complete_shoot
from gardenctl.exceptions import GardenctlError
from gardenctl.factory import Factory
from gardenctl.modules.target.models import Target, TargetLevel

app = typer.Typer(help="Set scope for next operations")


def _fail(e: GardenctlError):
    typer.echo(f"❌ {e}", err=True)
    if e.hint:
        typer.echo(f"   {e.hint}", err=True)
    raise typer.Exit(code=1)


def _done(target: Target):
    typer.echo(f"✅ Successfully targeted {target.kind.value} {target}")


@app.command("garden")
def target_garden(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Garden name or alias", autocompletion=complete_garden),
):
    """Target a garden cluster."""
    factory: Factory = ctx.obj
    try:
        target = factory.manager().target_garden(name)
    except GardenctlError as e:
        _fail(e)
    _done(target)


@app.command("project")
def target_project(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Project name", autocompletion=complete_project),
):
    """Target a project of the current garden."""
    factory: Factory = ctx.obj
    try:
        target = factory.manager().target_project("", name, factory.context())
    except GardenctlError as e:
        _fail(e)
    _done(target)


@app.command("seed")
def target_seed(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Seed name", autocompletion=complete_seed),
):
    """Target a seed of the current garden."""
    factory: Factory = ctx.obj
    try:
        target = factory.manager().target_seed("", name, factory.context())
    except GardenctlError as e:
        _fail(e)
    _done(target)


@app.command("shoot")
def target_shoot(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Shoot name", autocompletion=complete_shoot),
):
    """Target a shoot of the current project or seed."""
    factory: Factory = ctx.obj
    try:
        target = factory.manager().target_shoot(name, ctx=factory.context())
    except GardenctlError as e:
        _fail(e)
    _done(target)


@app.command("unset")
def unset(
    ctx: typer.Context,
    level: TargetLevel = typer.Argument(..., help="Level to unset", case_sensitive=False),
):
    """Unset a level of the current target."""
    factory: Factory = ctx.obj
    try:
        target = factory.manager().unset(level)
    except GardenctlError as e:
        _fail(e)
    typer.echo(f"✅ Unset {level.value}, target is now {target}")


@app.command("view")
def view(ctx: typer.Context):
    """Print the current target, including any target flags."""
    factory: Factory = ctx.obj
    try:
        target = factory.manager().current_target()
    except GardenctlError as e:
        _fail(e)

    if target.is_empty():
        typer.echo("No target set.")
        return
    typer.echo(yaml.safe_dump(target.to_dict(), default_flow_style=False, sort_keys=False), nl=False)
