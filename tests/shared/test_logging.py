import structlog
from shared.logging import current_environment, log_level_for, request_context


class TestEnvironment:
    def test_env_takes_precedence(self, monkeypatch):
        monkeypatch.setenv("ENV", "Staging")
        monkeypatch.setenv("PROTEAN_ENV", "production")
        assert current_environment() == "staging"

    def test_falls_back_to_protean_env(self, monkeypatch):
        monkeypatch.delenv("ENV", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "production")
        assert current_environment() == "production"

    def test_defaults_to_development(self, monkeypatch):
        for variable in ("ENV", "ENVIRONMENT", "PROTEAN_ENV"):
            monkeypatch.delenv(variable, raising=False)
        assert current_environment() == "development"


class TestLogLevel:
    def test_level_follows_environment(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert log_level_for("development") == "DEBUG"
        assert log_level_for("production") == "INFO"
        assert log_level_for("test") == "WARNING"
        assert log_level_for("unknown") == "INFO"

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert log_level_for("development") == "ERROR"


def test_request_context_is_unbound_on_exit():
    with request_context(domain="store", path="/carts"):
        assert structlog.contextvars.get_contextvars()["domain"] == "store"
    assert "domain" not in structlog.contextvars.get_contextvars()
