"""Tests for GPU capability probes."""

import subprocess
from unittest.mock import MagicMock, patch

from aistack.hardware.detector import (
    detect_amd_gpu,
    detect_nvidia_gpu,
    is_linux_host,
)


class TestDetectNvidiaGPU:
    @patch("aistack.hardware.detector.subprocess.run")
    def test_present(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0)
        assert detect_nvidia_gpu() is True
        assert mock_run.call_args[0][0] == ["nvidia-smi"]

    @patch("aistack.hardware.detector.subprocess.run")
    def test_driver_error(self, mock_run):
        mock_run.return_value = MagicMock(returncode=9)
        assert detect_nvidia_gpu() is False

    @patch("aistack.hardware.detector.subprocess.run", side_effect=FileNotFoundError)
    def test_not_installed(self, mock_run):
        assert detect_nvidia_gpu() is False

    @patch(
        "aistack.hardware.detector.subprocess.run",
        side_effect=subprocess.TimeoutExpired("nvidia-smi", 10),
    )
    def test_timeout(self, mock_run):
        assert detect_nvidia_gpu() is False


class TestDetectAmdGPU:
    @patch("aistack.hardware.detector.subprocess.run")
    def test_present(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0)
        assert detect_amd_gpu() is True
        assert mock_run.call_args[0][0] == ["rocm-smi"]

    @patch("aistack.hardware.detector.subprocess.run", side_effect=PermissionError)
    def test_permission_denied(self, mock_run):
        assert detect_amd_gpu() is False


class TestIsLinuxHost:
    @patch("aistack.hardware.detector.platform.system", return_value="Linux")
    def test_linux(self, mock_system):
        assert is_linux_host() is True

    @patch("aistack.hardware.detector.platform.system", return_value="Darwin")
    def test_macos(self, mock_system):
        assert is_linux_host() is False
