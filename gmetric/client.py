"""Fan-out client writing gmetric packets to every configured destination"""
from typing import Any, Callable, List, Optional, Sequence, Union

from logging_config import get_logger, log_client_close, log_client_open, log_error
from .encoder import meta_packet, value_packet
from .errors import (
    AlreadyOpenError,
    MultiError,
    NoDestinationsError,
    NotOpenError,
    TransportError,
)
from .models import Destination, Metric
from .transport import dial


logger = get_logger(__name__)


class Client:
    """A set of connections that metric packets are written to.

    Each destination gets its own connection on open(). Failures are isolated
    per destination: open(), close() and write() attempt every destination and
    raise a MultiError holding each failure. A partially failed open() still
    leaves the client writing to the destinations that did connect.

    The client is itself a sink, so the encoders can write to it directly.
    It is not safe to call open() or close() concurrently with other calls.
    """

    def __init__(self,
                 destinations: Sequence[Union[Destination, str]] = (),
                 dialer: Optional[Callable[[Destination], Any]] = None,
                 timeout: Optional[float] = None):
        self.destinations: List[Destination] = [
            Destination.parse(d) if isinstance(d, str) else d for d in destinations
        ]
        self.dialer = dialer or self._dial
        self.timeout = timeout
        self._connections: List[tuple] = []

    @classmethod
    def from_config(cls, config, dialer=None) -> "Client":
        """Create a client for the destinations in a Config"""
        return cls(config.destinations, dialer=dialer, timeout=config.connect_timeout)

    def _dial(self, destination: Destination):
        return dial(destination, timeout=self.timeout)

    @property
    def is_open(self) -> bool:
        """True when at least one connection is open"""
        return bool(self._connections)

    @property
    def open_destinations(self) -> List[Destination]:
        return [destination for destination, _ in self._connections]

    def open(self) -> None:
        """Connect to every destination.

        Raises MultiError if any connect failed; the successful connections
        are kept and remain write targets.
        """
        if not self.destinations:
            raise NoDestinationsError()
        if self._connections:
            raise AlreadyOpenError()

        errors = []
        for destination in self.destinations:
            try:
                conn = self.dialer(destination)
            except Exception as e:
                logger.warning(
                    "Failed to connect destination",
                    destination=str(destination),
                    error=str(e),
                    event_type="gmetric_connect_error"
                )
                errors.append(TransportError("dial", destination, e))
                continue
            self._connections.append((destination, conn))

        log_client_open(logger, self.destinations, len(self._connections), len(errors))
        if errors:
            raise MultiError(errors)

    def close(self) -> None:
        """Close every open connection, raising MultiError on any failure"""
        if not self.destinations:
            raise NoDestinationsError()

        connections, self._connections = self._connections, []
        errors = []
        for destination, conn in connections:
            try:
                conn.close()
            except Exception as e:
                logger.warning(
                    "Failed to close destination",
                    destination=str(destination),
                    error=str(e),
                    event_type="gmetric_close_error"
                )
                errors.append(TransportError("close", destination, e))

        log_client_close(logger, len(connections), len(errors))
        if errors:
            raise MultiError(errors)

    def write(self, data: bytes) -> int:
        """Send data to every open connection.

        Sends that succeed are not retried or rolled back when another
        destination fails.
        """
        if not self._connections:
            raise NotOpenError()

        data = bytes(data)
        errors = []
        for destination, conn in self._connections:
            try:
                conn.sendall(data)
            except Exception as e:
                logger.warning(
                    "Failed to send packet",
                    destination=str(destination),
                    error=str(e),
                    packet_bytes=len(data),
                    event_type="gmetric_send_error"
                )
                errors.append(TransportError("send", destination, e))

        if errors:
            raise MultiError(errors)
        logger.debug(
            "Sent packet",
            packet_bytes=len(data),
            destinations=len(self._connections),
            event_type="gmetric_send"
        )
        return len(data)

    def write_meta(self, metric: Metric) -> None:
        """Send the metadata packet for metric"""
        if not self._connections:
            raise NotOpenError()
        self.write(meta_packet(metric))

    def write_value(self, metric: Metric, value: Any) -> None:
        """Send a value packet for metric"""
        if not self._connections:
            raise NotOpenError()
        self.write(value_packet(metric, value))

    def __enter__(self) -> "Client":
        try:
            self.open()
        except MultiError:
            if self._connections:
                try:
                    self.close()
                except MultiError as e:
                    log_error(logger, e, {"operation": "close", "stage": "open_cleanup"})
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
            return
        # Keep the exception raised in the with body
        try:
            self.close()
        except MultiError as e:
            log_error(logger, e, {"operation": "close", "stage": "exit", "pending_error": exc_type.__name__})

    def __repr__(self) -> str:
        return f"Client(destinations={[str(d) for d in self.destinations]}, open={len(self._connections)})"
