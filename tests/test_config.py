"""Tests for configuration module"""
import os
import tempfile
from pathlib import Path
from unittest.mock import patch
import pytest
from pydantic import ValidationError

from config import Config
from metrics.registry import DEFAULT_REGION_SERVER_BEANS


class TestConfig:
    """Test configuration validation and parsing"""

    def test_default_config(self):
        """Test default configuration values"""
        with patch.dict(os.environ, {}, clear=True):
            config = Config()

        assert config.target_url == ""
        assert config.module_type == ""
        assert config.metrics_port == 8288
        assert config.metrics_host == "0.0.0.0"
        assert config.request_timeout == 10.0
        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.region_server_beans == list(DEFAULT_REGION_SERVER_BEANS)

    def test_environment_override(self):
        """Test configuration override from environment variables"""
        env_vars = {
            "TARGET_URL": "http://rs1:16030/jmx",
            "MODULE_TYPE": "RegionServer",
            "METRICS_PORT": "9100",
            "REQUEST_TIMEOUT": "2.5",
            "LOG_LEVEL": "debug",
            "REGION_SERVER_BEANS_STR": "Hadoop:service=HBase,name=A ; Hadoop:service=HBase,name=B;",
        }

        with patch.dict(os.environ, env_vars):
            config = Config()

            assert config.target_url == "http://rs1:16030/jmx"
            assert config.module_type == "RegionServer"
            assert config.metrics_port == 9100
            assert config.request_timeout == 2.5
            assert config.log_level == "DEBUG"
            assert config.region_server_beans == ["Hadoop:service=HBase,name=A", "Hadoop:service=HBase,name=B"]

    def test_validation_metrics_port(self):
        """Test validation of metrics port"""
        with patch.dict(os.environ, {"METRICS_PORT": "0"}):
            with pytest.raises(ValidationError):
                Config()

        with patch.dict(os.environ, {"METRICS_PORT": "70000"}):
            with pytest.raises(ValidationError):
                Config()

    def test_validation_request_timeout(self):
        with patch.dict(os.environ, {"REQUEST_TIMEOUT": "0"}):
            with pytest.raises(ValidationError):
                Config()

    def test_validation_log_level(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "verbose"}):
            with pytest.raises(ValidationError):
                Config()

    def test_keyword_overrides(self):
        config = Config(target_url="http://nn1:9870/jmx", metrics_port=9000)

        assert config.target_url == "http://nn1:9870/jmx"
        assert config.metrics_port == 9000

    def test_log_directory_creation(self):
        """Test that parent directories are created for the log file"""
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_file = Path(tmp_dir) / "subdir" / "exporter.log"

            with patch.dict(os.environ, {"LOG_FILE": str(log_file)}):
                config = Config()

                assert config.log_file == log_file
                assert log_file.parent.exists()


class TestCommandLine:
    """Test command line overrides from the entry point"""

    def test_flags_override_environment(self):
        from main import parse_args, build_config

        with patch.dict(os.environ, {"TARGET_URL": "http://env:9870/jmx", "MODULE_TYPE": "env"}):
            config = build_config(parse_args(["--target", "http://nn1:9870/jmx", "--module", "NameNode", "--port", "9200"]))

        assert config.target_url == "http://nn1:9870/jmx"
        assert config.module_type == "NameNode"
        assert config.metrics_port == 9200

    def test_environment_used_without_flags(self):
        from main import parse_args, build_config

        with patch.dict(os.environ, {"TARGET_URL": "http://env:9870/jmx"}):
            config = build_config(parse_args([]))

        assert config.target_url == "http://env:9870/jmx"
