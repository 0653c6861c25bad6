import click
from .. import config as config_module
from .. import installer
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ..features import AudioBackend

BACKEND_CHOICES = {
    "pulseaudio": AudioBackend.PULSEAUDIO,
    "alsa": AudioBackend.ALSA,
    "rodio": AudioBackend.RODIO,
}

@click.command()
@click.pass_context
@click.option("--backend", type=click.Choice(sorted(BACKEND_CHOICES)), default=None,
              help="Audio backend to build with instead of the detected one.")
@click.option("--verbose", "-v", is_flag=True, help="Show git and cargo output.")
@handle_exceptions
def install(ctx, backend, verbose):
    """Clone and build spotify_player with features for this platform."""
    logger.info("Installing spotify-player with improved image rendering...")
    conf = config_module.load_config(path=ctx.obj["path"])
    if not conf:
        logger.info(f"No {config_module.CONFIG_FILE} found, using default settings.")

    if not installer.install_player(conf, path=ctx.obj["path"],
                                    backend=BACKEND_CHOICES.get(backend), verbose=verbose):
        ctx.exit(1)
