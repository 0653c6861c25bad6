import os
import platform
import shutil
from .cli_logger import logger
from .features import OperatingSystemKind, PlatformFacts
from .utils import run_shell_command

ASOUND_DIR = "/proc/asound"


def detect_os_kind():
    return OperatingSystemKind.from_system_name(platform.system())


def has_pulseaudio_control():
    """Check whether the PulseAudio control utility is on PATH."""
    return shutil.which("pactl") is not None


def has_alsa_sound_subsystem(asound_dir=ASOUND_DIR):
    return os.path.isdir(asound_dir)


def has_pulseaudio_via_homebrew():
    """Check whether PulseAudio was installed with Homebrew."""
    if shutil.which("brew") is None:
        logger.debug("Homebrew not found; assuming PulseAudio is not installed.")
        return False
    _, _, return_code = run_shell_command(["brew", "list", "pulseaudio"])
    return return_code == 0


def gather_platform_facts():
    """Probe the host and return its :class:`PlatformFacts`.

    Only the probes relevant to the detected operating system are run.
    """
    os_kind = detect_os_kind()
    pactl = alsa = brew_pulse = False

    if os_kind is OperatingSystemKind.LINUX:
        pactl = has_pulseaudio_control()
        alsa = has_alsa_sound_subsystem()
    elif os_kind is OperatingSystemKind.MACOS:
        brew_pulse = has_pulseaudio_via_homebrew()
        if brew_pulse:
            logger.info("PulseAudio detected on macOS.")
    else:
        logger.warning(f"Unknown OS: {platform.system() or 'unknown'}, using default rodio backend")

    return PlatformFacts(
        os_kind=os_kind,
        has_pulseaudio_control=pactl,
        has_alsa_sound_subsystem=alsa,
        has_pulseaudio_via_package_manager=brew_pulse,
    )


def describe_platform(facts):
    def _yes_no(flag):
        return "yes" if flag else "no"

    lines = [f"Operating system: {facts.os_kind.value}"]
    if facts.os_kind is OperatingSystemKind.LINUX:
        lines.append(f"PulseAudio control (pactl): {_yes_no(facts.has_pulseaudio_control)}")
        lines.append(f"ALSA ({ASOUND_DIR}): {_yes_no(facts.has_alsa_sound_subsystem)}")
    elif facts.os_kind is OperatingSystemKind.MACOS:
        lines.append(f"PulseAudio via Homebrew: {_yes_no(facts.has_pulseaudio_via_package_manager)}")
    return lines
