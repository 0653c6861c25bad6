import click
import os
import sys
from .. import config as config_module
from ..cli_logger import logger
from ..launcher import LAUNCH_MODES


def _prompt_for_input(prompt, default, validation_func=None, **kwargs):
    while True:
        value = click.prompt(prompt, default=default, **kwargs)
        if validation_func is None or validation_func(value):
            return value
        else:
            logger.warning(f"Invalid input for {prompt}. Please try again.")


@click.command()
@click.option('--non-interactive', is_flag=True, help='Run in non-interactive mode using default values.')
@click.pass_context
def init(ctx, non_interactive):
    """Create a spotbuilder.toml with the build and launch settings."""
    conf = config_module.get_default_config()
    if non_interactive:
        logger.info("Running in non-interactive mode with default values.")
    else:
        logger.info("Please provide the following details:")
        try:
            player = conf["player"]
            launch = conf["launch"]
            player["repo_url"] = _prompt_for_input("Repository URL", player["repo_url"])
            player["source_dir"] = _prompt_for_input("Checkout directory", player["source_dir"])
            launch["mode"] = _prompt_for_input("Launch mode", launch["mode"], type=click.Choice(LAUNCH_MODES))
            if launch["mode"] == "ghostty-tmux":
                launch["tmux_config"] = _prompt_for_input("tmux config file", launch["tmux_config"])
                launch["session_name"] = _prompt_for_input("tmux session name", launch["session_name"],
                                                           validation_func=lambda v: bool(v.strip()))
            elif launch["mode"] == "ghostty":
                launch["ghostty_resources_dir"] = _prompt_for_input("Ghostty resources directory",
                                                                    launch["ghostty_resources_dir"])
        except click.Abort:
            logger.warning("\nInitialization aborted by user.")
            return

    try:
        if config_module.save_config(conf, path=ctx.obj["path"]):
            logger.success(f"Configuration saved to {os.path.join(ctx.obj['path'], config_module.CONFIG_FILE)}")
            logger.info("Next steps: Run 'spotbuilder install' to build the player.")
    except Exception as e:
        logger.error(f"An unexpected error occurred while saving configuration file: {e}")
        logger.exception(*sys.exc_info())
