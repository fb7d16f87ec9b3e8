"""Compose profile resolution and active-profile detection."""

import logging
from enum import Enum
from typing import Optional

from aistack.hardware import detector

from .containers import list_container_names
from .fallback import or_else
from .runner import CommandRunner

logger = logging.getLogger(__name__)

AUTO_GPU = "auto-gpu"
GPU = "gpu"
NO_PROFILE = "none"


class Profile(str, Enum):
    """Concrete compose profile selecting the Ollama workload."""

    CPU = "cpu"
    GPU_NVIDIA = "gpu-nvidia"
    GPU_AMD = "gpu-amd"


# Values accepted on the command line; the last two are requests only
PROFILE_REQUESTS = [p.value for p in Profile] + [AUTO_GPU, GPU]


def detect_gpu_profile() -> Profile:
    """Probe the host for a GPU, NVIDIA first, then AMD on Linux only."""
    if detector.detect_nvidia_gpu():
        return Profile.GPU_NVIDIA
    if detector.is_linux_host() and detector.detect_amd_gpu():
        return Profile.GPU_AMD
    return Profile.CPU


def resolve_profile(requested: str) -> Profile:
    """Reduce a requested profile to a concrete one.

    ``cpu``, ``gpu-nvidia`` and ``gpu-amd`` pass through; ``gpu`` and
    ``auto-gpu`` probe the hardware. Probing never fails.

    Raises:
        ValueError: If ``requested`` is not a known profile request.
    """
    if requested in (AUTO_GPU, GPU):
        profile = or_else(Profile.CPU, detect_gpu_profile, "GPU detection")
        logger.info(f"Auto-detected profile: {profile.value}")
        return profile
    try:
        return Profile(requested)
    except ValueError:
        raise ValueError(
            f"Unknown profile '{requested}' (expected one of {', '.join(PROFILE_REQUESTS)})"
        ) from None


def profile_from_container_names(
    names: list[str],
    gpu_marker: str = "ollama-gpu",
    amd_marker: str = "amd",
) -> Profile:
    """Infer the active profile from running container names."""
    for name in names:
        if gpu_marker in name:
            return Profile.GPU_AMD if amd_marker in name else Profile.GPU_NVIDIA
    return Profile.CPU


def detect_active_profile(
    runner: Optional[CommandRunner] = None,
    gpu_marker: str = "ollama-gpu",
    amd_marker: str = "amd",
) -> Profile:
    """Infer which profile the running stack was started with.

    Used by the stop path so teardown targets the same profile. Any
    inspection failure is logged as a warning and gives ``cpu``.
    """
    runner = runner or CommandRunner()
    names = or_else(
        [],
        lambda: list_container_names(runner, gpu_marker),
        "Active profile detection",
        level=logging.WARNING,
    )
    return profile_from_container_names(names, gpu_marker, amd_marker)
