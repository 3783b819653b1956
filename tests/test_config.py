"""Tests for configuration module"""
import os
import socket
import tempfile
from pathlib import Path
from unittest.mock import patch
import pytest
from pydantic import ValidationError

from config import Config
from gmetric.models import Destination, Slope, ValueType


class TestConfig:
    """Test configuration validation and parsing"""

    def test_default_config(self):
        """Test default configuration values"""
        config = Config()

        assert config.destinations == [Destination(network="udp", host="127.0.0.1", port=8649)]
        assert config.host == socket.gethostname()
        assert config.spoof == ""
        assert config.tick_interval == 60
        assert config.lifetime == 0
        assert config.connect_timeout is None
        assert config.log_level == "INFO"
        assert config.log_file is None

    def test_environment_override(self):
        """Test configuration override from environment variables"""
        env_vars = {
            "GMETRIC_DESTINATIONS_STR": "udp://10.0.0.1:8649,tcp://10.0.0.2:8650",
            "GMETRIC_HOST": "web01",
            "GMETRIC_SPOOF": "10.0.0.9:web01-spoof",
            "GMETRIC_TICK_INTERVAL": "20",
            "GMETRIC_LIFETIME": "86400",
            "GMETRIC_CONNECT_TIMEOUT": "1.5",
            "GMETRIC_LOG_LEVEL": "debug",
        }

        with patch.dict(os.environ, env_vars):
            config = Config()

            assert [str(d) for d in config.destinations] == [
                "udp://10.0.0.1:8649",
                "tcp://10.0.0.2:8650",
            ]
            assert config.host == "web01"
            assert config.spoof == "10.0.0.9:web01-spoof"
            assert config.tick_interval == 20
            assert config.lifetime == 86400
            assert config.connect_timeout == 1.5
            assert config.log_level == "DEBUG"

    def test_destination_network_case_insensitive(self):
        """Test upper-case network prefixes are accepted"""
        config = Config(destinations_str="UDP://10.0.0.1:8649,Tcp6://[::1]:8650")

        assert config.destinations == [
            Destination(network="udp", host="10.0.0.1", port=8649),
            Destination(network="tcp6", host="::1", port=8650),
        ]

    def test_destinations_parsing(self):
        """Test destination list parsing with whitespace and IPv6"""
        config = Config(destinations_str=" 127.0.0.1:8649 , udp6://[::1]:8650 ,")

        assert config.destinations == [
            Destination(host="127.0.0.1", port=8649),
            Destination(network="udp6", host="::1", port=8650),
        ]
        assert str(config.destinations[1]) == "udp6://[::1]:8650"

    def test_destinations_setter(self):
        """Test setting destinations from a list"""
        config = Config()
        config.destinations = [Destination(host="10.0.0.1", port=8649), Destination(network="tcp", host="h", port=1)]

        assert config.destinations_str == "udp://10.0.0.1:8649,tcp://h:1"

    def test_validation_destination(self):
        """Test validation of malformed destinations"""
        with patch.dict(os.environ, {"GMETRIC_DESTINATIONS_STR": "localhost"}):
            with pytest.raises(ValidationError):
                Config()

        with patch.dict(os.environ, {"GMETRIC_DESTINATIONS_STR": "sctp://localhost:8649"}):
            with pytest.raises(ValidationError):
                Config()

        with patch.dict(os.environ, {"GMETRIC_DESTINATIONS_STR": "localhost:70000"}):
            with pytest.raises(ValidationError):
                Config()

    def test_validation_intervals(self):
        """Test validation of tick interval and lifetime"""
        with patch.dict(os.environ, {"GMETRIC_TICK_INTERVAL": "-1"}):
            with pytest.raises(ValidationError):
                Config()

        with patch.dict(os.environ, {"GMETRIC_LIFETIME": "-1"}):
            with pytest.raises(ValidationError):
                Config()

    def test_validation_log_level(self):
        """Test validation of log level"""
        with patch.dict(os.environ, {"GMETRIC_LOG_LEVEL": "LOUD"}):
            with pytest.raises(ValidationError):
                Config()

    def test_make_metric(self):
        """Test metric defaults come from configuration"""
        config = Config(host="web01", spoof="10.0.0.9:web01", tick_interval=20, lifetime=3600)
        metric = config.make_metric("requests", ValueType.UINT32, units="count", slope=Slope.POSITIVE)

        assert metric.host == "web01"
        assert metric.spoof == "10.0.0.9:web01"
        assert metric.tick_interval == 20
        assert metric.lifetime == 3600
        assert metric.units == "count"
        assert metric.slope is Slope.POSITIVE

    def test_make_metric_overrides(self):
        """Test explicit fields win over configured defaults"""
        config = Config(host="web01", spoof="10.0.0.9:web01")
        metric = config.make_metric("load", "float", host="db01", spoof="")

        assert metric.host == "db01"
        assert metric.is_spoofed is False
        assert metric.value_type is ValueType.FLOAT32

    def test_directory_creation(self):
        """Test that parent directories are created for the log file"""
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_file = Path(tmp_dir) / "subdir" / "test.log"

            with patch.dict(os.environ, {"GMETRIC_LOG_FILE": str(log_file)}):
                config = Config()

                assert config.log_file == log_file
                assert config.log_file.parent.exists()
