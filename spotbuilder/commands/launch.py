import click
from .. import config as config_module
from .. import launcher
from ..cli_logger import logger
from ..decorators import handle_exceptions

@click.command()
@click.pass_context
@click.option("--mode", "-m", type=click.Choice(launcher.LAUNCH_MODES), default=None,
              help="How to start the player (defaults to launch.mode from the config).")
@click.option("--no-kill", is_flag=True, help="Keep already running player instances.")
@handle_exceptions
def launch(ctx, mode, no_kill):
    """Start spotify_player in a terminal setup suited to inline images."""
    conf = config_module.load_config(path=ctx.obj["path"])
    if mode is None:
        mode = config_module.get_setting(conf, "launch.mode")
        if mode not in launcher.LAUNCH_MODES:
            logger.error(f"Error: launch.mode '{mode}' in {config_module.CONFIG_FILE} is not one of: "
                         f"{', '.join(launcher.LAUNCH_MODES)}")
            logger.info("Fix it with 'spotbuilder config set launch.mode <mode>' or pass --mode.")
            ctx.exit(1)
    return_code = launcher.launch(mode, conf, path=ctx.obj["path"], kill_existing=not no_kill)
    if return_code:
        ctx.exit(return_code)
