"""Exception types raised by the gmetric encoder and client"""
from typing import Iterator, List, Optional


class GmetricError(Exception):
    """Base class for all gmetric errors"""
    pass


class SinkError(GmetricError):
    """The byte sink rejected a write while encoding a packet"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class TransportError(GmetricError):
    """A connect, send or close against one destination failed"""

    def __init__(self, operation: str, destination, cause: BaseException):
        super().__init__(f"gmetric: {operation} {destination}: {cause}")
        self.operation = operation
        self.destination = destination
        self.cause = cause
        self.__cause__ = cause


class NoDestinationsError(GmetricError):
    """Open or close was called on a client without destinations"""

    def __init__(self):
        super().__init__("gmetric: no destinations configured")


class NotOpenError(GmetricError):
    """A write was attempted with no open connections"""

    def __init__(self):
        super().__init__("gmetric: client not opened")


class AlreadyOpenError(GmetricError):
    """Open was called while connections from a previous open are still held"""

    def __init__(self):
        super().__init__("gmetric: client already opened")


class MultiError(GmetricError):
    """A collection of failures from independent per-destination operations"""

    def __init__(self, errors: List[BaseException]):
        if not errors:
            raise ValueError("MultiError requires at least one error")
        self.errors = list(errors)
        super().__init__(self._render())

    def _render(self) -> str:
        lines = ["gmetric: multi-error:"]
        lines.extend(str(error) for error in self.errors)
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)
