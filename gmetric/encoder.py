"""Metadata and value packet encoders for the gmond metric protocol"""
import io
from typing import Any

from .models import Metric, ValueType, slope_code, whole_seconds
from .wire import write_extras, write_string, write_uint32


META_PACKET = 128
VALUE_PACKET = 133
VALUE_FORMAT = "%s"


def render_value(value_type: ValueType, value: Any) -> str:
    """Render a value as the text gmond parses according to value_type"""
    value_type = ValueType(value_type)
    if value_type.is_integer:
        return "%d" % value
    if value_type.is_float:
        return "%f" % value
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _write_head(metric: Metric, sink) -> None:
    write_string(sink, metric.reported_host)
    write_string(sink, metric.name)
    write_uint32(sink, 1 if metric.is_spoofed else 0)


def encode_meta(metric: Metric, sink) -> None:
    """Write the metadata packet describing metric to sink.

    Raises SinkError on the first failed write; nothing after the failing
    field is written.
    """
    write_uint32(sink, META_PACKET)
    _write_head(metric, sink)
    write_string(sink, metric.value_type.value)
    write_string(sink, metric.name)
    write_string(sink, metric.units)
    write_uint32(sink, slope_code(metric.slope))
    write_uint32(sink, whole_seconds(metric.tick_interval))
    write_uint32(sink, whole_seconds(metric.lifetime))
    write_extras(sink, metric.extras())


def encode_value(metric: Metric, value: Any, sink) -> None:
    """Write a value packet for metric to sink.

    The value is rendered as text per the metric's value type; the binary
    layout is the same for every type.
    """
    text = render_value(metric.value_type, value)
    write_uint32(sink, VALUE_PACKET)
    _write_head(metric, sink)
    write_string(sink, VALUE_FORMAT)
    write_string(sink, text)


def meta_packet(metric: Metric) -> bytes:
    """Encode a metadata packet into bytes"""
    buf = io.BytesIO()
    encode_meta(metric, buf)
    return buf.getvalue()


def value_packet(metric: Metric, value: Any) -> bytes:
    """Encode a value packet into bytes"""
    buf = io.BytesIO()
    encode_value(metric, value, buf)
    return buf.getvalue()
