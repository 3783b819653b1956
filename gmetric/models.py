"""Metric and destination models for the gmetric wire protocol"""
import re
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, List, Tuple, Union
from pydantic import BaseModel, Field, validator


Seconds = Union[timedelta, int, float]


class ValueType(Enum):
    """Value types understood by gmond, keyed by their wire name"""
    STRING = "string"
    UINT8 = "uint8"
    INT8 = "int8"
    UINT16 = "uint16"
    INT16 = "int16"
    UINT32 = "uint32"
    INT32 = "int32"
    FLOAT32 = "float"
    FLOAT64 = "double"

    @property
    def is_integer(self) -> bool:
        return self in _INTEGER_TYPES

    @property
    def is_float(self) -> bool:
        return self in (ValueType.FLOAT32, ValueType.FLOAT64)


_INTEGER_TYPES = frozenset([
    ValueType.UINT8, ValueType.INT8,
    ValueType.UINT16, ValueType.INT16,
    ValueType.UINT32, ValueType.INT32,
])


class Slope(Enum):
    """Expected trend direction of a metric"""
    ZERO = "zero"
    POSITIVE = "positive"
    NEGATIVE = "negative"
    BOTH = "both"
    UNSPECIFIED = "unspecified"


SLOPE_UNSPECIFIED_CODE = 4

_SLOPE_CODES = {
    Slope.ZERO: 0,
    Slope.POSITIVE: 1,
    Slope.NEGATIVE: 2,
    Slope.BOTH: 3,
    Slope.UNSPECIFIED: SLOPE_UNSPECIFIED_CODE,
}


def slope_code(slope: Any) -> int:
    """Wire code for a slope; anything unrecognized encodes as unspecified"""
    try:
        return _SLOPE_CODES[Slope(slope)]
    except (ValueError, TypeError):
        return SLOPE_UNSPECIFIED_CODE


def whole_seconds(value: Seconds) -> int:
    """Truncate a duration to whole seconds"""
    if isinstance(value, timedelta):
        value = value.total_seconds()
    return int(value)


@dataclass(frozen=True)
class Metric:
    """Static description of a metric reported to gmond.

    The name is used as the RRD file name and as the graph title unless a
    title is given. When spoof is set ("ip:hostname") it replaces host on the
    wire and the packet is flagged as spoofed.

    tick_interval (TMax) is the longest expected gap between updates and
    lifetime (DMax) is how long after the last update the metric may be
    expired. Both take a timedelta or a number of seconds; a lifetime of
    zero means the metric never expires.
    """
    name: str
    host: str
    value_type: ValueType
    units: str = ""
    slope: Any = Slope.UNSPECIFIED
    tick_interval: Seconds = 0
    lifetime: Seconds = 0
    title: str = ""
    description: str = ""
    groups: Tuple[str, ...] = field(default_factory=tuple)
    spoof: str = ""

    def __post_init__(self):
        # Frozen, so normalise through object.__setattr__
        object.__setattr__(self, "value_type", ValueType(self.value_type))
        groups = self.groups or ()
        if isinstance(groups, str):
            groups = (groups,)
        object.__setattr__(self, "groups", tuple(groups))
        object.__setattr__(self, "spoof", self.spoof or "")

    @property
    def is_spoofed(self) -> bool:
        return bool(self.spoof)

    @property
    def reported_host(self) -> str:
        """Host identity written in the packet head"""
        return self.spoof if self.is_spoofed else self.host

    def extras(self) -> List[Tuple[str, str]]:
        """Extra NAME/VAL pairs in wire order"""
        pairs = []
        if self.title:
            pairs.append(("TITLE", self.title))
        if self.description:
            pairs.append(("DESC", self.description))
        if self.spoof:
            pairs.append(("SPOOF_HOST", self.spoof))
        for group in self.groups:
            pairs.append(("GROUP", group))
        return pairs


NETWORKS = ("udp", "udp4", "udp6", "tcp", "tcp4", "tcp6")

_DESTINATION_RE = re.compile(
    r'^(?:(?P<network>[a-z0-9]+)://)?'
    r'(?:\[(?P<ipv6>[^\]]+)\]|(?P<host>[^:\[\]]+))'
    r':(?P<port>\d+)$',
    re.IGNORECASE,
)


class Destination(BaseModel):
    """Address a client sends packets to: network, host and port"""
    network: str = Field(default="udp", description="Transport network")
    host: str = Field(..., min_length=1, description="Destination host or IP")
    port: int = Field(..., ge=1, le=65535, description="Destination port")

    class Config:
        frozen = True

    @validator('network')
    def validate_network(cls, v):
        v = v.lower()
        if v not in NETWORKS:
            raise ValueError(f"unsupported network {v!r}, expected one of {', '.join(NETWORKS)}")
        return v

    @property
    def transport(self) -> str:
        """Network without the address family suffix"""
        return self.network.rstrip("46")

    @classmethod
    def parse(cls, text: str) -> "Destination":
        """Parse "host:port", "[v6]:port" or "network://host:port" """
        match = _DESTINATION_RE.match(text.strip())
        if not match:
            raise ValueError(f"invalid destination {text!r}")
        return cls(
            network=match.group("network") or "udp",
            host=match.group("ipv6") or match.group("host"),
            port=int(match.group("port")),
        )

    def __str__(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.network}://{host}:{self.port}"
