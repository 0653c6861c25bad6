import click
from .. import config as config_module
from .. import installer
from ..cli_logger import logger

@click.command()
@click.pass_context
def doctor(ctx):
    """Check that the tools needed to build and launch the player are available."""
    logger.info("Running environment check...")
    conf = config_module.load_config(path=ctx.obj["path"])
    if installer.check_environment(conf, path=ctx.obj["path"]):
        logger.success("Environment check completed successfully.")
    else:
        logger.error("Environment check found issues. Please review the warnings above.")
