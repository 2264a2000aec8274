import logging
from typing import Optional

import typer

from gardenctl.commands import target
from gardenctl.commands.completion import complete_garden, complete_project, complete_seed, complete_shoot
from gardenctl.config import CONFIG_NAME, GARDEN_HOME_FOLDER
from gardenctl.factory import Factory
from gardenctl.logging import setup_logger
from gardenctl.modules.target.flags import TargetFlags

app = typer.Typer(help="gardenctl is a utility to interact with Gardener installations")


# Configure logging
def setup_logging(debug: bool = False):
    """Configure logging based on debug mode."""
    setup_logger(None, logging.DEBUG if debug else None)


app.add_typer(target.app, name="target")


# Global options callback
@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None, "--config", help=f"config file (default is $HOME/{GARDEN_HOME_FOLDER}/{CONFIG_NAME}.yaml)"
    ),
    garden: Optional[str] = typer.Option(
        None, "--garden", help="target the given garden cluster", autocompletion=complete_garden
    ),
    project: Optional[str] = typer.Option(
        None, "--project", help="target the given project", autocompletion=complete_project
    ),
    seed: Optional[str] = typer.Option(
        None, "--seed", help="target the given seed cluster", autocompletion=complete_seed
    ),
    shoot: Optional[str] = typer.Option(
        None, "--shoot", help="target the given shoot cluster", autocompletion=complete_shoot
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """gardenctl - target and work with Gardener clusters."""
    setup_logging(debug)
    if debug:
        logging.debug("Debug mode enabled")

    # allow to temporarily re-target a different cluster
    flags = TargetFlags(
        garden_name=garden or "",
        project_name=project or "",
        seed_name=seed or "",
        shoot_name=shoot or "",
    )
    if isinstance(ctx.obj, Factory):
        # factory handed in by the caller, e.g. with a different lookup
        ctx.obj.target_flags = flags
        ctx.obj.config_file = config or ctx.obj.config_file
    else:
        ctx.obj = Factory(config_file=config, target_flags=flags)

