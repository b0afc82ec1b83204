"""
Tests for the dashboard API.

Tests validate:
- GET /health and GET /mc/status
- GET /mc/dwe-stats caching and fallback payloads
- GET /mc/notion-tasks
- GET /mc/crons, /mc/services and /mc/agents
- Error envelope for unknown routes and unhandled exceptions
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from missionctl import __version__
from missionctl.core.config.models import AgentConfig, MissionControlConfig
from missionctl.core.dashboard.api.app import create_app
from missionctl.core.health.models import ServiceState, ServiceStatus
from missionctl.core.schedule.crontab import CronJob
from missionctl.core.tracker.aggregator import StatsAggregator
from missionctl.core.tracker.exceptions import NetworkError


@pytest.fixture
def config() -> MissionControlConfig:
    return MissionControlConfig(
        agents=[AgentConfig(id="coo", name="COO", role="Routing", tasks=12)],
    )


@pytest.fixture
def source(fake_source, sample_pages):
    return fake_source(sample_pages)


@pytest.fixture
def client(config, source) -> TestClient:
    return TestClient(create_app(config, aggregator=StatsAggregator(source)))


class TestSystemEndpoints:
    def test_health(self, client) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_status(self, client) -> None:
        response = client.get("/mc/status")

        assert response.status_code == 200
        data = response.json()
        assert data["online"] is True
        assert data["uptime"] >= 0
        assert data["version"] == __version__
        assert "serverTime" in data
        assert isinstance(data["memory"], float)
        assert data["memory"] >= 0

    def test_status_memory_in_megabytes(self, client) -> None:
        process = MagicMock()
        process.memory_info.return_value.rss = 50 * 1024 * 1024
        with patch(
            "missionctl.core.dashboard.api.routes.system.psutil.Process", return_value=process
        ):
            data = client.get("/mc/status").json()

        assert data["memory"] == 50.0


class TestStatsEndpoint:
    """Tests for GET /mc/dwe-stats."""

    def test_fresh_stats(self, client, source) -> None:
        response = client.get("/mc/dwe-stats")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 40
        assert data["completed"] == 2
        assert data["inProgress"] == 1
        assert data["remaining"] == 38
        assert data["maxId"] == 40
        assert data["activeTasks"] == 5
        assert data["cached"] is False
        assert "error" not in data
        assert source.passes == 1

    def test_second_request_is_cached(self, client, source) -> None:
        client.get("/mc/dwe-stats")
        response = client.get("/mc/dwe-stats")

        assert response.json()["cached"] is True
        assert source.passes == 1

    def test_failure_serves_baseline(self, fake_source, config) -> None:
        source = fake_source(error=NetworkError("fake", "HTTP 502 error from Notion API"))
        client = TestClient(create_app(config, aggregator=StatsAggregator(source)))

        response = client.get("/mc/dwe-stats")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1020
        assert data["completed"] == 562
        assert data["inProgress"] == 4
        assert data["remaining"] == 458
        assert data["maxId"] == 1020
        assert data["error"] == "HTTP 502 error from Notion API"

    def test_default_aggregator_without_api_key(self, config) -> None:
        client = TestClient(create_app(config))

        data = client.get("/mc/dwe-stats").json()

        assert data["total"] == 1020
        assert data["error"] == "Notion API key not configured"


class TestTasksEndpoint:
    """Tests for GET /mc/notion-tasks."""

    def test_tasks(self, client) -> None:
        response = client.get("/mc/notion-tasks")

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "Notion"
        assert [t["idNumber"] for t in data["tasks"]] == [1, 2, 3, 40, 5]
        assert data["tasks"][0]["dueDate"] is None
        assert data["stats"]["total"] == 5
        assert data["stats"]["maxIdNumber"] == 40
        assert "error" not in data

    def test_shares_cache_with_stats(self, client, source) -> None:
        client.get("/mc/dwe-stats")
        data = client.get("/mc/notion-tasks").json()

        assert data["cached"] is True
        assert source.passes == 1

    def test_failure(self, fake_source, config) -> None:
        source = fake_source(error=NetworkError("fake", "down"))
        client = TestClient(create_app(config, aggregator=StatsAggregator(source)))

        data = client.get("/mc/notion-tasks").json()

        assert data["tasks"] == []
        assert data["error"] == "down"


class TestOpsEndpoints:
    """Crons, services and agents."""

    def test_crons(self, client) -> None:
        jobs = [
            CronJob(
                id="CRON-001",
                schedule="*/15 * * * *",
                command="ops-monitor",
                next_run="10:15am",
            )
        ]
        with patch(
            "missionctl.core.dashboard.api.routes.schedule.list_cron_jobs", return_value=jobs
        ) as mock_list:
            response = client.get("/mc/crons")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["crons"][0] == {
            "id": "CRON-001",
            "schedule": "*/15 * * * *",
            "command": "ops-monitor",
            "status": "active",
            "nextRun": "10:15am",
        }
        mock_list.assert_called_once_with(max_entries=20)

    def test_no_crontab(self, client) -> None:
        with patch(
            "missionctl.core.dashboard.api.routes.schedule.list_cron_jobs", return_value=[]
        ):
            data = client.get("/mc/crons").json()

        assert data["crons"] == []
        assert data["count"] == 0

    def test_services(self, client, config) -> None:
        results = [
            ServiceStatus(
                name="Gateway", port=3000, status=ServiceState.ONLINE, info="Port 3000 open"
            ),
            ServiceStatus(name="n8n", status=ServiceState.OFFLINE, info="Unreachable"),
        ]
        with patch(
            "missionctl.core.dashboard.api.routes.health.check_services",
            AsyncMock(return_value=results),
        ) as mock_check:
            response = client.get("/mc/services")

        assert response.status_code == 200
        data = response.json()
        assert [s["status"] for s in data["services"]] == ["online", "offline"]
        assert data["services"][0]["info"] == "Port 3000 open"
        mock_check.assert_awaited_once_with(config.services)

    def test_agents(self, client) -> None:
        data = client.get("/mc/agents").json()

        assert data["count"] == 1
        assert data["agents"][0]["id"] == "coo"
        assert data["agents"][0]["status"] == "online"
        assert data["agents"][0]["tasks"] == 12


class TestErrorHandling:
    def test_unknown_route(self, client) -> None:
        response = client.get("/mc/does-not-exist")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "NOT_FOUND"
        assert data["request_id"]

    def test_method_not_allowed(self, client) -> None:
        response = client.post("/mc/dwe-stats")

        assert response.status_code == 405
        assert response.json()["error_code"] == "METHOD_NOT_ALLOWED"

    def test_unhandled_exception(self, config) -> None:
        aggregator = MagicMock()
        aggregator.get_stats = AsyncMock(side_effect=RuntimeError("kaput"))
        client = TestClient(
            create_app(config, aggregator=aggregator), raise_server_exceptions=False
        )

        response = client.get("/mc/dwe-stats")

        assert response.status_code == 500
        data = response.json()
        assert data["error_code"] == "INTERNAL_ERROR"
        assert data["detail"] == "kaput"
