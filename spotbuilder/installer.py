import os
import shutil
from . import config
from . import player_config
from .cli_logger import logger
from .features import OperatingSystemKind, resolve, with_backend
from .platform_probe import gather_platform_facts, describe_platform
from .utils import run_shell_command


def clone_repository(repo_url, dest_dir, verbose=False):
    """Clone the player repository unless ``dest_dir`` already exists."""
    if os.path.isdir(dest_dir):
        logger.info(f"Using existing {os.path.basename(dest_dir)} directory...")
        return True

    logger.info(f"Cloning {repo_url} into {dest_dir}...")
    lines, process = run_shell_command(["git", "clone", repo_url, dest_dir], stream_output=True)
    for line in lines:
        if verbose:
            logger.step_info(line.rstrip(), indent=2)
    if process.returncode != 0:
        logger.error(f"Failed to clone {repo_url} (exit code {process.returncode}).")
        return False
    return True


def build_command(source_dir, crate_path, feature_string):
    return [
        "cargo", "install",
        "--path", os.path.join(source_dir, crate_path),
        "--no-default-features",
        "--features", feature_string,
    ]


def build_player(source_dir, crate_path, feature_string, verbose=False):
    """Run ``cargo install`` for the player crate. Returns True on exit code 0."""
    command = build_command(source_dir, crate_path, feature_string)
    logger.debug(f"Running: {' '.join(command)}")
    lines, process = run_shell_command(command, stream_output=True, cwd=source_dir)
    for line in lines:
        line = line.rstrip()
        # cargo prints "error" lines even when not verbose
        if verbose or line.startswith("error"):
            logger.step_info(line, indent=2)
    return process.returncode == 0


def _log_post_install_hints(binary, app_config):
    logger.success("Installation successful!")
    logger.info(f"You can now run '{binary}' from your terminal")
    logger.step_info("")
    logger.step_info("To enable sixel support for better image quality:")
    logger.step_info("1. Install libsixel: brew install libsixel (macOS) or apt install libsixel-dev (Linux)", indent=2)
    logger.step_info(f"2. Set image_protocol = \"sixel\" in your {app_config}", indent=2)
    logger.step_info("   (or run 'spotbuilder image-protocol sixel')", indent=2)


def install_player(conf, path=".", backend=None, verbose=False):
    """Clone and build the player with features resolved for this host.

    ``backend`` (an :class:`~spotbuilder.features.AudioBackend`) overrides the
    detected audio backend.
    """
    selection = resolve(gather_platform_facts())
    if backend is not None:
        logger.info(f"Overriding detected audio backend with {backend.value}")
        selection = with_backend(selection, backend)
    feature_string = selection.as_feature_string()

    source_dir = config.resolve_path(config.get_setting(conf, "player.source_dir"), path)
    crate_path = config.get_setting(conf, "player.crate_path")
    repo_url = config.get_setting(conf, "player.repo_url")

    if not clone_repository(repo_url, source_dir, verbose=verbose):
        logger.error("Installation failed. Please check the error messages above.")
        return False

    logger.info(f"Building with features: {feature_string}")
    if not build_player(source_dir, crate_path, feature_string, verbose=verbose):
        logger.error("Installation failed. Please check the error messages above.")
        return False

    _log_post_install_hints(config.get_setting(conf, "player.binary"),
                            config.get_setting(conf, "image.app_config"))
    return True


REQUIRED_TOOLS = ["git", "cargo"]


def check_environment(conf, path="."):
    """Report on the tools needed to build and launch the player."""
    all_ok = True
    facts = gather_platform_facts()
    for line in describe_platform(facts):
        logger.step_info(line, indent=2)
    logger.info(f"Resolved features: {resolve(facts).as_feature_string()}")

    for tool in REQUIRED_TOOLS:
        if shutil.which(tool) is None:
            logger.warning(f"'{tool}' is not installed or not on PATH.")
            all_ok = False

    binary = config.get_setting(conf, "player.binary")
    if shutil.which(binary) is None:
        logger.warning(f"'{binary}' is not on PATH. Run 'spotbuilder install'.")
        all_ok = False

    mode = config.get_setting(conf, "launch.mode")
    if mode == "ghostty-tmux":
        if facts.os_kind is not OperatingSystemKind.MACOS:
            logger.warning("launch.mode is 'ghostty-tmux', which is only supported on macOS.")
            all_ok = False
        if shutil.which("tmux") is None:
            logger.warning("'tmux' is not installed but launch.mode is 'ghostty-tmux'.")
            all_ok = False
        source_dir = config.resolve_path(config.get_setting(conf, "player.source_dir"), path)
        tmux_config = config.resolve_path(config.get_setting(conf, "launch.tmux_config"), source_dir)
        if not os.path.isfile(tmux_config):
            logger.warning(f"tmux config '{tmux_config}' does not exist.")
            all_ok = False
    elif mode == "ghostty":
        resources = config.get_setting(conf, "launch.ghostty_resources_dir")
        if not os.path.isdir(resources):
            logger.warning(f"Ghostty resources directory '{resources}' does not exist.")
            all_ok = False

    protocol = player_config.get_image_protocol(player_config.app_config_path(conf))
    logger.info(f"Image protocol: {protocol or 'auto'}")
    return all_ok
