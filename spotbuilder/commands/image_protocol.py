import click
import toml
from .. import config as config_module
from .. import player_config
from ..cli_logger import logger
from ..decorators import handle_exceptions

@click.command("image-protocol")
@click.pass_context
@click.argument("protocol", required=False, type=click.Choice(player_config.IMAGE_PROTOCOLS, case_sensitive=False))
@click.option("--app-config", type=click.Path(dir_okay=False), default=None,
              help="Path to the player's app.toml.")
@handle_exceptions
def image_protocol(ctx, protocol, app_config):
    """Show or set the image protocol used by spotify_player.

    PROTOCOL: one of auto, kitty, iterm, sixel. 'auto' removes the setting.
    """
    conf = config_module.load_config(path=ctx.obj["path"])
    path = app_config or player_config.app_config_path(conf)

    if protocol is None:
        current = player_config.get_image_protocol(path)
        click.echo(current or "auto")
        return

    try:
        player_config.set_image_protocol(protocol, path)
    except toml.TomlDecodeError as e:
        logger.error(f"Error decoding TOML file at {path}: {e}")
        logger.info("Fix the syntax error first; the file was left unchanged.")
        ctx.exit(1)
    except (IOError, OSError) as e:
        logger.error(f"Error writing {path}: {e}")
        logger.info("Please check file permissions.")
        ctx.exit(1)
    logger.success(f"Image protocol set to {protocol.lower()}")
    if protocol.lower() == "sixel":
        logger.info("Sixel output needs the player built with the 'sixel' feature and libsixel installed.")
