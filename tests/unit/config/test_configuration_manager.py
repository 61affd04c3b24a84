"""Unit tests for ConfigurationManager."""

import json

import pytest

from qbusiness_resources.config.manager import ConfigurationManager
from qbusiness_resources.domain.core.exceptions import ConfigurationError
from qbusiness_resources.domain.lifecycle.value_objects import BackoffPolicy
from qbusiness_resources.providers.aws.resources import APPLICATION, RETRIEVER


@pytest.mark.unit
class TestConfigurationManager:
    """Test cases for ConfigurationManager."""

    def test_defaults_without_file(self):
        config = ConfigurationManager().app_config

        assert config.logging.level == "INFO"
        assert config.aws.region == "us-east-1"
        assert config.backoff == {}

    def test_yaml_file_with_env_expansion(self, tmp_path, monkeypatch):
        monkeypatch.setenv("QBR_TEST_LOG_DIR", str(tmp_path))
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "logging:\n"
            "  level: debug\n"
            "  destination: file\n"
            "  file_path: $QBR_TEST_LOG_DIR/handlers.log\n"
            "aws:\n"
            "  region: ${QBR_TEST_REGION:eu-central-1}\n"
        )

        config = ConfigurationManager(str(config_file)).app_config

        assert config.logging.level == "DEBUG"
        assert config.logging.file_path == f"{tmp_path}/handlers.log"
        assert config.aws.region == "eu-central-1"

    def test_json_file_from_environment(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"aws": {"max_retries": 7}}))
        monkeypatch.setenv("QBR_CONFIG_FILE", str(config_file))

        assert ConfigurationManager().app_config.aws.max_retries == 7

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("QBR_LOG_LEVEL", "warning")
        monkeypatch.setenv("AWS_REGION", "ap-southeast-2")

        config = ConfigurationManager().app_config

        assert config.logging.level == "WARNING"
        assert config.aws.region == "ap-southeast-2"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigurationManager(str(tmp_path / "missing.json")).app_config

    def test_invalid_values(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"logging": {"level": "LOUD"}}))

        with pytest.raises(ConfigurationError):
            ConfigurationManager(str(config_file)).app_config

    def test_invalid_backoff_policy(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"backoff": {
            "AWS::QBusiness::Application": {"create": {"poll_interval_seconds": 60, "timeout_seconds": 30}},
        }}))

        with pytest.raises(ConfigurationError):
            ConfigurationManager(str(config_file)).app_config

    def test_resolve_definition_applies_overrides(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"backoff": {
            "AWS::QBusiness::Application": {"create": {"poll_interval_seconds": 10, "timeout_seconds": 600}},
            "AWS::QBusiness::Retriever": {"delete": {"poll_interval_seconds": 10, "timeout_seconds": 600}},
        }}))
        manager = ConfigurationManager(str(config_file))

        application = manager.resolve_definition(APPLICATION)
        retriever = manager.resolve_definition(RETRIEVER)

        assert application.create_policy == BackoffPolicy(poll_interval=10, timeout=600)
        assert application.update_policy == APPLICATION.update_policy
        assert retriever.delete_policy is None

    def test_resolve_definition_without_overrides(self):
        assert ConfigurationManager().resolve_definition(APPLICATION) is APPLICATION
