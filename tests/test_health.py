import os

from fastapi.testclient import TestClient

os.environ.setdefault("PERSISTENCE_BACKEND", "memory")

from task_api.main import app, create_app  # noqa: E402
from task_api.repositories import InMemoryTaskStore  # noqa: E402
from task_api.settings import Settings  # noqa: E402

client = TestClient(app)


class TestHealth:
    def test_root_welcome(self):
        res = client.get("/")
        assert res.status_code == 200
        data = res.json()
        assert data["message"] == "Welcome to Task Manager API"
        assert data["version"] == "1.0.0"

    def test_health_check(self):
        res = client.get("/health")
        assert res.status_code == 200
        data = res.json()
        assert data["status"] == "UP"
        assert data["service"] == "task-manager-api"
        assert data["backend"] in ("memory", "sqlite")

    def test_health_reports_configured_backend(self):
        settings = Settings(
            persistence_backend="sqlite",
            sqlite_db_path="unused.db",
            cors_allow_origins=["*"],
            log_level="INFO",
        )
        res = TestClient(create_app(settings=settings, store=InMemoryTaskStore())).get("/health")
        assert res.json()["backend"] == "sqlite"


class TestCors:
    def test_restricted_origins(self):
        settings = Settings(
            persistence_backend="memory",
            sqlite_db_path="unused.db",
            cors_allow_origins=["http://allowed.example"],
            log_level="INFO",
        )
        restricted = TestClient(create_app(settings=settings, store=InMemoryTaskStore()))
        ok = restricted.get("/health", headers={"Origin": "http://allowed.example"})
        assert ok.headers.get("access-control-allow-origin") == "http://allowed.example"
        denied = restricted.get("/health", headers={"Origin": "http://other.example"})
        assert "access-control-allow-origin" not in denied.headers
