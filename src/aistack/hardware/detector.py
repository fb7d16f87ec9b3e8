"""GPU capability probes used for profile auto-detection.

Each probe is a pass/fail check against a vendor CLI. A missing tool,
non-zero exit or timeout all mean the capability is absent.
"""

import logging
import platform
import subprocess

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 10


def _probe(cmd: list[str]) -> bool:
    """Run a probe command and report whether it exited cleanly."""
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=PROBE_TIMEOUT,
        )
    except (FileNotFoundError, PermissionError, subprocess.TimeoutExpired) as e:
        logger.debug(f"{cmd[0]} probe failed: {e}")
        return False

    if result.returncode != 0:
        logger.debug(f"{cmd[0]} exited with code {result.returncode}")
        return False
    return True


def detect_nvidia_gpu() -> bool:
    """Check for a usable NVIDIA driver via nvidia-smi."""
    return _probe(["nvidia-smi"])


def detect_amd_gpu() -> bool:
    """Check for a usable ROCm install via rocm-smi."""
    return _probe(["rocm-smi"])


def is_linux_host() -> bool:
    return platform.system() == "Linux"
