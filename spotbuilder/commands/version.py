import click
import sys
import importlib.metadata
from ..cli_logger import logger

@click.command()
def version():
    """Print the version of the SpotBuilder tool."""
    try:
        ver = importlib.metadata.version("spotbuilder")
        click.echo(f"SpotBuilder version {ver}")
    except importlib.metadata.PackageNotFoundError:
        logger.error("Error: Could not determine the version of SpotBuilder. Is it installed correctly?")
    except Exception as e:
        logger.error(f"An unexpected error occurred while determining SpotBuilder version: {e}")
        logger.exception(*sys.exc_info())
