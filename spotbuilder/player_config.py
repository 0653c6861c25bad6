"""Read and edit the image settings in the player's own ``app.toml``."""
import os
import re
import toml
from . import config
from .cli_logger import logger

IMAGE_PROTOCOLS = ("auto", "kitty", "iterm", "sixel")
IMAGE_PROTOCOL_KEY = "image_protocol"


def app_config_path(conf=None):
    return os.path.expanduser(config.get_setting(conf, "image.app_config"))


def _read_app_config(path):
    if not os.path.exists(path):
        return {}
    with open(path, "r") as f:
        return toml.load(f)


def get_image_protocol(path):
    """Return the configured protocol, or None when the player auto-detects."""
    try:
        return _read_app_config(path).get(IMAGE_PROTOCOL_KEY)
    except toml.TomlDecodeError as e:
        logger.error(f"Error decoding TOML file at {path}: {e}")
        return None


_KEY_LINE = re.compile(rf"^\s*{IMAGE_PROTOCOL_KEY}\s*=")
_TABLE_HEADER = re.compile(r"^\s*\[")


def _edit_top_level_key(lines, value):
    """Replace, insert or drop the top-level ``image_protocol`` line.

    Only the lines before the first table header are top-level; everything
    else (comments included) is left untouched.
    """
    end = next((i for i, line in enumerate(lines) if _TABLE_HEADER.match(line)), len(lines))
    kept = [line for line in lines[:end] if not _KEY_LINE.match(line)]
    if value is not None:
        new_line = f"{IMAGE_PROTOCOL_KEY} = \"{value}\"\n"
        if kept and not kept[-1].endswith("\n"):
            kept[-1] += "\n"
        existing = next((i for i, line in enumerate(lines[:end]) if _KEY_LINE.match(line)), None)
        if existing is not None:
            kept.insert(existing, new_line)
        elif end < len(lines):
            # keep a blank line between the key and the first table
            while kept and not kept[-1].strip():
                kept.pop()
            kept.extend([new_line, "\n"])
        else:
            kept.append(new_line)
    return kept + lines[end:]


def set_image_protocol(protocol, path):
    """Set ``image_protocol`` in ``path`` without touching the rest of the file.

    Raises ``ValueError`` for unknown protocols and ``toml.TomlDecodeError``
    when the existing file is not valid TOML.
    """
    protocol = protocol.lower()
    if protocol not in IMAGE_PROTOCOLS:
        raise ValueError(f"Unsupported image protocol '{protocol}'. Choose one of: {', '.join(IMAGE_PROTOCOLS)}")

    lines = []
    if os.path.exists(path):
        with open(path, "r") as f:
            content = f.read()
        toml.loads(content)
        lines = content.splitlines(keepends=True)

    lines = _edit_top_level_key(lines, None if protocol == "auto" else protocol)

    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w") as f:
        f.writelines(lines)
    logger.info(f"Updated {path}")
    return _read_app_config(path)
