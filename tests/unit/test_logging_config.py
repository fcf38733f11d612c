from src.utils import logging_config
from tests.test_template import TestTemplate


class TestInstanceId(TestTemplate):
    def test_local_without_container_id(self, monkeypatch):
        monkeypatch.delenv("ECS_TASK_ID", raising=False)
        monkeypatch.delenv("HOSTNAME", raising=False)

        assert logging_config._get_instance_id() == "local"

    def test_task_id_is_shortened(self, monkeypatch):
        monkeypatch.setenv("ECS_TASK_ID", "0f1e2d3c4b5a69788796a5b4")

        assert logging_config._get_instance_id() == "ia5b4"

    def test_hostname_fallback(self, monkeypatch):
        monkeypatch.delenv("ECS_TASK_ID", raising=False)
        monkeypatch.setenv("HOSTNAME", "ip-10-0-1-23")

        assert logging_config._get_instance_id() == "i1-23"


class TestLevelOverrides(TestTemplate):
    def test_override_wins_over_config(self):
        assert logging_config._should_log_level("DEBUG", {"debug": True}) is True
        assert logging_config._should_log_level("INFO", {"info": False}) is False

    def test_unknown_level_is_shown(self):
        assert logging_config._should_log_level("SUCCESS") is True
