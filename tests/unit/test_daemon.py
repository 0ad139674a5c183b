"""Unit tests for daemon wiring."""

from pathlib import Path
from unittest.mock import patch

import pytest

from pimainteno.config import Config
from pimainteno.daemon import build_daemon
from pimainteno.status_store import keys


def _config(tmp_path: Path, **scheduler) -> Config:
    return Config.model_validate(
        {
            "scheduler": {"projects": [str(tmp_path / "weather-bot")], **scheduler},
            "cache": {"path": str(tmp_path / "status.db")},
            "git": {"timeout_seconds": 15},
        }
    )


@pytest.mark.unit
class TestBuildDaemon:
    """Tests for build_daemon."""

    def test_components_share_store_and_stop_event(self, tmp_path: Path) -> None:
        daemon = build_daemon(_config(tmp_path, remote="origin", branch="main"))
        try:
            assert daemon.orchestrator.status_store is daemon.status_store
            assert daemon.orchestrator.change_oracle.status_store is daemon.status_store
            assert daemon.periodic_runner.stop_event is daemon.stop_event
            assert daemon.run_queue.stop_event is daemon.stop_event
            assert daemon.orchestrator.patch_applier.remote == "origin"
            assert daemon.orchestrator.patch_applier.timeout == 15
            assert [p.name for p in daemon.orchestrator.projects] == ["weather-bot"]
        finally:
            daemon.status_store.close()

    def test_one_shot_runs_a_pass(self, tmp_path: Path) -> None:
        daemon = build_daemon(_config(tmp_path))
        try:
            report = daemon.run_one_shot()

            assert report.outcomes == {str(tmp_path / "weather-bot"): "skipped_missing"}
        finally:
            daemon.status_store.close()


@pytest.mark.unit
class TestBackgroundThreads:
    """Tests for start_background and shutdown."""

    def test_disabled_scheduler_starts_no_timer(self, tmp_path: Path) -> None:
        daemon = build_daemon(_config(tmp_path, enabled=False))

        daemon.start_background()
        names = sorted(t.name for t in daemon._threads)
        daemon.shutdown()

        assert names == ["pimainteno-manual", "pimainteno-systemd"]
        assert daemon._threads == []

    def test_shutdown_stops_threads(self, tmp_path: Path) -> None:
        daemon = build_daemon(_config(tmp_path, interval_seconds=3600))

        with patch.object(daemon.orchestrator, "run_once_if_enabled", return_value=None):
            daemon.start_background()
            threads = list(daemon._threads)
            daemon.stop_event.wait(0.05)
            daemon.shutdown()

        assert daemon.stop_event.is_set()
        assert all(not t.is_alive() for t in threads)

    def test_serve_shuts_down_after_server_exits(self, tmp_path: Path) -> None:
        daemon = build_daemon(_config(tmp_path, enabled=False))

        with patch("pimainteno.daemon.uvicorn.Server") as mock_server:
            daemon.serve()

        mock_server.return_value.run.assert_called_once()
        assert daemon.stop_event.is_set()
        assert daemon.systemd_monitor.status_store is daemon.status_store


@pytest.mark.unit
def test_monitor_status_recorded_when_disabled(tmp_path: Path) -> None:
    daemon = build_daemon(_config(tmp_path, enabled=False))
    daemon.start_background()
    daemon.shutdown()

    daemon2 = build_daemon(_config(tmp_path))
    try:
        assert daemon2.status_store.get(keys.SYSTEMD_STATUS) == "disabled"
    finally:
        daemon2.status_store.close()
