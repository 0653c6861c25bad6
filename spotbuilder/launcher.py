import os
import shlex
from . import config
from .cli_logger import logger
from .features import OperatingSystemKind
from .platform_probe import detect_os_kind
from .utils import run_shell_command, run_interactive_command

LAUNCH_MODES = ("terminal", "ghostty", "ghostty-tmux")

IMAGE_CAPABLE_TERMINALS = [
    "Ghostty (recommended)",
    "iTerm2",
    "Kitty",
    "Or any terminal with sixel support",
]


def _check_mode(mode):
    if mode not in LAUNCH_MODES:
        raise ValueError(f"Unknown launch mode '{mode}'. Choose one of: {', '.join(LAUNCH_MODES)}")


def build_launch_environment(mode, conf, base_env=None):
    """Environment for the player process in ``mode``."""
    _check_mode(mode)
    env = dict(os.environ if base_env is None else base_env)
    if mode == "terminal":
        env["TERM"] = config.get_setting(conf, "launch.term")
    elif mode == "ghostty":
        # The player picks its image protocol from these
        env["TERM_PROGRAM"] = "ghostty"
        env["GHOSTTY_RESOURCES_DIR"] = config.get_setting(conf, "launch.ghostty_resources_dir")
    return env


def build_launch_command(mode, conf, path="."):
    _check_mode(mode)
    binary = config.get_setting(conf, "player.binary")
    if mode != "ghostty-tmux":
        return [binary]

    source_dir = config.resolve_path(config.get_setting(conf, "player.source_dir"), path)
    tmux_config = config.resolve_path(config.get_setting(conf, "launch.tmux_config"), source_dir)
    session = shlex.quote(config.get_setting(conf, "launch.session_name"))
    inner = f"cd {shlex.quote(source_dir)} && {binary}"
    tmux = (
        f"tmux -f {shlex.quote(tmux_config)} new-session -d -s {session} {shlex.quote(inner)}"
        f" \\; attach-session -t {session}"
    )
    return ["open", "-a", "Ghostty", "--args", "-e", tmux]


def kill_existing_instances(binary):
    """Stop running player instances. Returns True if any were signalled."""
    _, stderr, return_code = run_shell_command(["pkill", "-f", binary])
    if return_code == 0:
        logger.info(f"Stopped running {binary} instances.")
        return True
    if return_code != 1:
        # 1 means nothing matched
        logger.warning(f"pkill exited with code {return_code}: {stderr.strip()}")
    return False


def launch(mode, conf, path=".", kill_existing=True):
    """Start the player in ``mode`` and return its exit code."""
    _check_mode(mode)
    binary = config.get_setting(conf, "player.binary")

    if mode == "ghostty-tmux" and detect_os_kind() is not OperatingSystemKind.MACOS:
        logger.warning("The ghostty-tmux mode launches Ghostty through 'open -a' and needs macOS.")
        return 1

    if kill_existing:
        kill_existing_instances(binary)

    if mode == "terminal":
        logger.info("Starting Spotify Player with high-quality image support...")
        logger.step_info("Make sure you're running this in a terminal that supports images:")
        for terminal in IMAGE_CAPABLE_TERMINALS:
            logger.step_info(f"- {terminal}", indent=3)
    elif mode == "ghostty":
        logger.info("Starting Spotify Player with Ghostty image support...")
    else:
        logger.info("Launching Ghostty with tmux...")

    source_dir = config.resolve_path(config.get_setting(conf, "player.source_dir"), path)
    cwd = source_dir if os.path.isdir(source_dir) else None
    command = build_launch_command(mode, conf, path=path)
    env = build_launch_environment(mode, conf)
    logger.debug(f"Running: {' '.join(command)}")
    return run_interactive_command(command, env=env, cwd=cwd)
