"""Cargo feature selection for the spotify_player build.

The decision is a pure function of :class:`PlatformFacts`; probing the host
for those facts lives in :mod:`spotbuilder.platform_probe`.
"""
from dataclasses import dataclass
from enum import Enum


class OperatingSystemKind(Enum):
    LINUX = "linux"
    MACOS = "macos"
    OTHER = "other"

    @classmethod
    def from_system_name(cls, name):
        """Classify a ``uname -s`` style name (``Linux``, ``Darwin``, ...)."""
        name = name or ""
        if name.startswith("Linux"):
            return cls.LINUX
        if name.startswith("Darwin"):
            return cls.MACOS
        return cls.OTHER


class AudioBackend(Enum):
    """Audio backends the player can be compiled with.

    ``RODIO`` is the self-contained generic audio library; it needs no
    system sound server and is the fallback everywhere.
    """
    PULSEAUDIO = "pulseaudio-backend"
    ALSA = "alsa-backend"
    RODIO = "rodio-backend"


COMMON_CAPABILITIES = ("pixelate", "streaming", "media-control", "image")


@dataclass(frozen=True)
class PlatformFacts:
    os_kind: OperatingSystemKind
    has_pulseaudio_control: bool = False
    has_alsa_sound_subsystem: bool = False
    has_pulseaudio_via_package_manager: bool = False


@dataclass(frozen=True)
class FeatureSelection:
    audio_backend: AudioBackend
    additional_capabilities: tuple = COMMON_CAPABILITIES

    @property
    def features(self):
        return [self.audio_backend.value, *self.additional_capabilities]

    def as_feature_string(self):
        """Value for ``cargo install --features``."""
        return ",".join(self.features)


def resolve(facts: PlatformFacts) -> FeatureSelection:
    if facts.os_kind is OperatingSystemKind.LINUX:
        if facts.has_pulseaudio_control:
            backend = AudioBackend.PULSEAUDIO
        elif facts.has_alsa_sound_subsystem:
            backend = AudioBackend.ALSA
        else:
            backend = AudioBackend.RODIO
    elif facts.os_kind is OperatingSystemKind.MACOS:
        backend = AudioBackend.RODIO
        # PulseAudio is opt-in on macOS; there is no ALSA check here
        if facts.has_pulseaudio_via_package_manager:
            backend = AudioBackend.PULSEAUDIO
    else:
        backend = AudioBackend.RODIO

    return FeatureSelection(audio_backend=backend)


def with_backend(selection: FeatureSelection, backend: AudioBackend) -> FeatureSelection:
    """Return ``selection`` with the audio backend replaced."""
    return FeatureSelection(audio_backend=backend,
                            additional_capabilities=selection.additional_capabilities)
