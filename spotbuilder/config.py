import copy
import toml
import os
from .cli_logger import logger

CONFIG_FILE = "spotbuilder.toml"

DEFAULT_CONFIG = {
    "player": {
        "repo_url": "https://github.com/bbzylstra/spotify-player.git",
        "source_dir": "spotify-player",
        "crate_path": "spotify_player",
        "binary": "spotify_player",
    },
    "launch": {
        "mode": "terminal",
        "term": "xterm-256color",
        "tmux_config": "tmux_spotify.conf",
        "session_name": "spotify_player",
        "ghostty_resources_dir": "/Applications/Ghostty.app/Contents/Resources",
    },
    "image": {
        "app_config": os.path.join("~", ".config", "spotify-player", "app.toml"),
    },
}


def get_default_config():
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config(path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    logger.info(f"Loading configuration from {config_path}")
    if os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                return toml.load(f)
        except toml.TomlDecodeError as e:
            logger.error(f"Error decoding TOML file at {config_path}: {e}")
            logger.info("Please check the file's format for syntax errors.")
        except IOError as e:
            logger.error(f"Error reading configuration file at {config_path}: {e}")
            logger.info("Please check file permissions.")
    return {}


def save_config(config, path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    logger.info(f"Saving configuration to {config_path}")
    try:
        with open(config_path, "w") as f:
            toml.dump(config, f)
        return True
    except IOError as e:
        logger.error(f"Error saving configuration to {config_path}: {e}")
        logger.info("Please check file permissions and ensure the directory is writable.")
        return False


def get_setting(conf, key):
    """Look up a dotted key in ``conf``, falling back to DEFAULT_CONFIG.

    Relative paths stored in the ``player.source_dir`` and
    ``launch.tmux_config`` settings are returned as written; callers resolve
    them against the project directory.
    """
    keys = key.split(".")
    for source in (conf or {}, DEFAULT_CONFIG):
        value = source
        try:
            for k in keys:
                value = value[k]
        except (KeyError, TypeError):
            continue
        return value
    raise KeyError(key)


def resolve_path(value, base="."):
    """Expand ``~`` and make ``value`` absolute relative to ``base``."""
    value = os.path.expanduser(value)
    if not os.path.isabs(value):
        value = os.path.join(os.path.abspath(base), value)
    return value
