import click
import os
import sys
import json
import toml
from .. import config as config_module
from ..cli_logger import logger

NOT_FOUND = "Error: No spotbuilder.toml found. Please run 'spotbuilder init' first."

@click.group()
@click.pass_context
def config(ctx):
    """View or edit the spotbuilder.toml configuration file."""
    pass

@config.command()
@click.pass_context
def view(ctx):
    """View spotbuilder.toml, or the built-in defaults when there is none."""
    config_file_path = os.path.join(ctx.obj["path"], config_module.CONFIG_FILE)
    if not os.path.exists(config_file_path):
        logger.warning(f"No {config_module.CONFIG_FILE} found; showing the default settings.")
        click.echo(toml.dumps(config_module.get_default_config()))
        return
    try:
        with open(config_file_path, 'r') as f:
            click.echo(f.read())
    except IOError as e:
        logger.error(f"Error reading spotbuilder.toml at {config_file_path}: {e}")
        logger.info("Please check file permissions.")

@config.command()
@click.pass_context
def edit(ctx):
    """Edit spotbuilder.toml in your default editor, creating it from the defaults if needed."""
    config_file_path = os.path.join(ctx.obj["path"], config_module.CONFIG_FILE)
    if not os.path.exists(config_file_path):
        logger.info(f"No {config_module.CONFIG_FILE} found; starting from the default settings.")
        if not config_module.save_config(config_module.get_default_config(), path=ctx.obj["path"]):
            return
    try:
        click.edit(filename=config_file_path)
    except click.ClickException as e:
        logger.error(f"Click error editing spotbuilder.toml: {e}")
        logger.info("This might indicate an issue with your editor configuration or environment variables.")
    except Exception as e:
        logger.error(f"An unexpected error occurred while editing spotbuilder.toml: {e}")
        logger.exception(*sys.exc_info())

@config.command("list")
@click.option("--defaults", is_flag=True, help="Include default values for unset keys.")
@click.pass_context
def list_config(ctx, defaults):
    """List all configuration keys and values."""
    conf = config_module.load_config(path=ctx.obj["path"])
    if defaults:
        merged = config_module.get_default_config()
        for section, values in conf.items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(values)
            else:
                merged[section] = values
        conf = merged
    elif not conf:
        logger.error(NOT_FOUND)
        return
    click.echo(json.dumps(conf, indent=4))

@config.command()
@click.argument('key')
@click.pass_context
def get(ctx, key):
    """Get a value, falling back to the built-in default."""
    conf = config_module.load_config(path=ctx.obj["path"])
    try:
        click.echo(config_module.get_setting(conf, key))
    except KeyError:
        logger.error(f"Error: Key '{key}' not found in spotbuilder.toml")

@config.command("set")
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_value(ctx, key, value):
    """Set a value in the spotbuilder.toml file."""
    conf = config_module.load_config(path=ctx.obj["path"])

    keys = key.split('.')
    d = conf
    for k in keys[:-1]:
        d = d.setdefault(k, {})
    d[keys[-1]] = value

    if config_module.save_config(conf, path=ctx.obj["path"]):
        logger.info(f"Set '{key}' to '{value}'")

@config.command()
@click.argument('key')
@click.pass_context
def unset(ctx, key):
    """Remove a key from the spotbuilder.toml file."""
    conf = config_module.load_config(path=ctx.obj["path"])
    if not conf:
        logger.error(NOT_FOUND)
        return

    keys = key.split('.')
    d = conf
    try:
        for k in keys[:-1]:
            d = d[k]
        del d[keys[-1]]
        if config_module.save_config(conf, path=ctx.obj["path"]):
            logger.info(f"Unset '{key}'")
    except (KeyError, TypeError):
        logger.error(f"Error: Key '{key}' not found in spotbuilder.toml")
