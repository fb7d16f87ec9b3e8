"""Tests for StackManager operations."""

from pathlib import Path
from unittest.mock import patch

import pytest

from aistack.config import StackSettings
from aistack.errors import CommandError, ServiceNotFoundError
from aistack.output import RecordingReporter
from aistack.stack.manager import StackManager
from aistack.stack.parsers import LinkedProject

DETECTOR = "aistack.stack.profiles.detector"


def _manager(runner, settings=None):
    return StackManager(RecordingReporter(), settings=settings, runner=runner)


class TestStartAI:
    def test_cpu(self, make_runner):
        runner = make_runner()
        manager = _manager(runner)
        assert manager.start_ai("cpu") is True
        assert runner.streamed == ["docker compose --profile cpu up -d"]
        assert manager.reporter.at("success") == ["AI Stack started successfully"]

    @patch(f"{DETECTOR}.detect_nvidia_gpu", return_value=True)
    def test_auto_gpu_with_tunnel(self, mock_nvidia, make_runner):
        runner = make_runner()
        manager = _manager(runner)
        assert manager.start_ai("auto-gpu", tunnel=True) is True
        assert runner.streamed == [
            "docker compose --profile gpu-nvidia --profile cloudflare up -d"
        ]
        assert "Detected profile: gpu-nvidia" in manager.reporter.at("info")

    def test_nonzero_exit(self, make_runner):
        manager = _manager(make_runner(stream_code=1))
        assert manager.start_ai("cpu") is False
        assert manager.reporter.at("error")

    def test_compose_missing(self, make_runner):
        runner = make_runner({
            "docker compose --profile cpu up -d": CommandError("Command not found: docker"),
        })
        manager = _manager(runner)
        assert manager.start_ai("cpu") is False
        assert "Command not found" in manager.reporter.at("error")[0]

    def test_interrupt_propagates(self, make_runner):
        runner = make_runner({"docker compose --profile cpu up -d": KeyboardInterrupt()})
        manager = _manager(runner)
        with pytest.raises(KeyboardInterrupt):
            manager.start_ai("cpu")
        assert manager.reporter.at("success") == []


class TestStartSupabase:
    def test_already_running(self, make_runner):
        runner = make_runner({make_runner.SUPABASE_STATUS: make_runner.ok()})
        manager = _manager(runner)
        assert manager.start_supabase() is True
        assert runner.streamed == []
        assert "Supabase is already running" in manager.reporter.at("success")

    def test_starts_when_down(self, make_runner):
        runner = make_runner({make_runner.SUPABASE_STATUS: make_runner.failed()})
        manager = _manager(runner)
        assert manager.start_supabase() is True
        assert runner.streamed == ["npx supabase start"]

    def test_start_failure(self, make_runner):
        runner = make_runner(
            {make_runner.SUPABASE_STATUS: make_runner.failed()}, stream_code=1
        )
        assert _manager(runner).start_supabase() is False


class TestStopAI:
    def test_uses_detected_amd_profile(self, make_runner):
        runner = make_runner({
            make_runner.GPU_CONTAINERS: make_runner.ok("starter-ollama-gpu-amd-1\n"),
        })
        manager = _manager(runner)
        assert manager.stop_ai(force=True) is True
        assert runner.streamed == [
            "docker compose --profile gpu-amd --profile cloudflare "
            "down --volumes --remove-orphans"
        ]
        assert manager.reporter.at("warning")

    def test_detection_failure_falls_back_to_cpu(self, make_runner):
        runner = make_runner()
        assert _manager(runner).stop_ai() is True
        assert runner.streamed == ["docker compose --profile cpu --profile cloudflare down"]

    def test_down_failure(self, make_runner):
        assert _manager(make_runner(stream_code=1)).stop_ai() is False


class TestStopSupabase:
    def test_not_running(self, make_runner):
        runner = make_runner({make_runner.SUPABASE_STATUS: make_runner.failed()})
        manager = _manager(runner)
        assert manager.stop_supabase() is True
        assert runner.streamed == []
        assert "Supabase is not running" in manager.reporter.at("info")

    def test_stops(self, make_runner):
        runner = make_runner({make_runner.SUPABASE_STATUS: make_runner.ok()})
        assert _manager(runner).stop_supabase() is True
        assert runner.streamed == ["npx supabase stop"]


class TestInspection:
    def test_linked_project(self, make_runner):
        runner = make_runner({
            "npx supabase projects list": make_runner.ok(
                "    ●    | org-1 | ref-9 | my-app | us-east-1\n"
            ),
        })
        assert _manager(runner).linked_project() == LinkedProject("org-1", "ref-9", "my-app")

    def test_linked_project_cli_missing(self, make_runner):
        assert _manager(make_runner()).linked_project() is None

    def test_compose_services(self, make_runner):
        runner = make_runner({
            "docker compose config --services": make_runner.ok("postgres\nn8n\nqdrant\n"),
        })
        assert _manager(runner).compose_services() == ["postgres", "n8n", "qdrant"]

    def test_detailed_tables_skip_failures(self, make_runner):
        runner = make_runner({
            "docker compose ps --format table": make_runner.ok("NAME  STATUS\nn8n   Up\n"),
            "docker system df": make_runner.ok(""),
        })
        tables = _manager(runner).detailed_tables()
        assert "n8n" in tables["ai"]
        assert tables["supabase"] is None
        assert tables["resources"] is None
        assert tables["system"] is None

    def test_project_dir_from_settings(self, make_runner, tmp_path: Path):
        settings = StackSettings(project_dir=str(tmp_path))
        assert _manager(make_runner(), settings).project_dir == tmp_path


class TestResolveLogCommand:
    def test_all(self, make_runner):
        cmd = _manager(make_runner()).resolve_log_command("all")
        assert cmd == ["docker", "compose", "logs", "--tail", "50"]

    def test_ai_follow_since(self, make_runner):
        cmd = _manager(make_runner()).resolve_log_command("ai", follow=True, tail="10", since="2h")
        assert cmd == [
            "docker", "compose", "logs", "--follow", "--tail", "10", "--since", "2h",
        ]

    @pytest.mark.parametrize("service", ["n8n", "open-webui", "ollama-gpu"])
    def test_ai_service(self, make_runner, service):
        cmd = _manager(make_runner()).resolve_log_command(service)
        assert cmd[:3] == ["docker", "compose", "logs"]
        assert cmd[-1] == service

    def test_supabase_uses_first_container(self, make_runner):
        runner = make_runner({
            make_runner.SUPABASE_CONTAINERS: make_runner.ok("supabase_db_app\nsupabase_kong_app\n"),
        })
        cmd = _manager(runner).resolve_log_command("supabase")
        assert cmd == ["docker", "logs", "--tail", "50", "supabase_db_app"]

    def test_supabase_without_containers(self, make_runner):
        runner = make_runner({make_runner.SUPABASE_CONTAINERS: make_runner.ok("")})
        assert _manager(runner).resolve_log_command("supabase") is None

    def test_supabase_container_name(self, make_runner):
        cmd = _manager(make_runner()).resolve_log_command("supabase_auth_app")
        assert cmd == ["docker", "logs", "--tail", "50", "supabase_auth_app"]

    def test_other_running_container(self, make_runner):
        runner = make_runner({
            "docker ps --filter name=redis --format {{.Names}}": make_runner.ok("starter-redis-1\n"),
        })
        cmd = _manager(runner).resolve_log_command("redis")
        assert cmd[-1] == "starter-redis-1"

    def test_unknown_target(self, make_runner):
        runner = make_runner({
            "docker ps --filter name=nothing --format {{.Names}}": make_runner.ok(""),
        })
        with pytest.raises(ServiceNotFoundError, match="'nothing' not found"):
            _manager(runner).resolve_log_command("nothing")

    def test_default_tail_from_settings(self, make_runner):
        manager = _manager(make_runner(), StackSettings(default_tail=5))
        assert manager.resolve_log_command("ai")[-2:] == ["--tail", "5"]


class TestShowLogs:
    def test_streams(self, make_runner):
        runner = make_runner()
        assert _manager(runner).show_logs("n8n", follow=True) == 0
        assert runner.streamed == ["docker compose logs --follow --tail 50 n8n"]

    def test_no_supabase_containers_warns(self, make_runner):
        runner = make_runner({make_runner.SUPABASE_CONTAINERS: make_runner.ok("")})
        manager = _manager(runner)
        assert manager.show_logs("supabase") == 0
        assert manager.reporter.at("warning") == ["No Supabase containers found"]
        assert runner.streamed == []
