"""Configuration for the gmetric client"""
import logging
import socket
from pathlib import Path
from typing import List, Optional
from pydantic import Field, validator
from pydantic_settings import BaseSettings
from gmetric.models import Destination, Metric, ValueType


class Config(BaseSettings):
    """Client settings read from GMETRIC_* environment variables"""

    # Destinations
    destinations_str: str = Field(
        default="udp://127.0.0.1:8649",
        description="Destinations (comma-separated, [network://]host:port)"
    )
    connect_timeout: Optional[float] = Field(default=None, gt=0, description="Connect timeout in seconds")

    # Metric defaults
    host: str = Field(default_factory=socket.gethostname, description="Reporting host")
    spoof: str = Field(default="", description="Spoofed host as ip:hostname")
    tick_interval: int = Field(default=60, ge=0, description="Default TMax in seconds")
    lifetime: int = Field(default=0, ge=0, description="Default DMax in seconds, 0 never expires")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Log file")

    class Config:
        env_prefix = "GMETRIC_"
        case_sensitive = False

    @validator('destinations_str')
    def validate_destinations(cls, v):
        for item in v.split(','):
            if not item.strip():
                continue
            try:
                Destination.parse(item)
            except ValueError as e:
                raise ValueError(f"Invalid destination {item.strip()!r}: {e}")
        return v

    @validator('log_level')
    def validate_log_level(cls, v):
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @validator('log_file')
    def ensure_log_directory(cls, v):
        if isinstance(v, Path):
            v.parent.mkdir(parents=True, exist_ok=True)
        return v

    @property
    def destinations(self) -> List[Destination]:
        """Get destinations as a list"""
        return [Destination.parse(item) for item in self.destinations_str.split(',') if item.strip()]

    @destinations.setter
    def destinations(self, value: List[Destination]):
        """Set destinations from a list"""
        self.destinations_str = ','.join(str(d) for d in value)

    def make_metric(self, name: str, value_type: ValueType, **overrides) -> Metric:
        """Build a Metric using the configured host, spoof and timing defaults"""
        fields = {
            "host": self.host,
            "spoof": self.spoof,
            "tick_interval": self.tick_interval,
            "lifetime": self.lifetime,
        }
        fields.update(overrides)
        return Metric(name=name, value_type=value_type, **fields)
