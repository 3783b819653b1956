"""Client for the Ganglia gmond metric wire protocol"""
from .models import Destination, Metric, Slope, ValueType, slope_code
from .encoder import encode_meta, encode_value, meta_packet, value_packet, render_value
from .errors import (
    AlreadyOpenError,
    GmetricError,
    MultiError,
    NoDestinationsError,
    NotOpenError,
    SinkError,
    TransportError,
)
from .client import Client

__all__ = [
    'Client',
    'Destination',
    'Metric',
    'Slope',
    'ValueType',
    'slope_code',
    'encode_meta',
    'encode_value',
    'meta_packet',
    'value_packet',
    'render_value',
    'GmetricError',
    'SinkError',
    'TransportError',
    'NoDestinationsError',
    'NotOpenError',
    'AlreadyOpenError',
    'MultiError',
]
