"""Socket dialing for client destinations"""
import socket
from typing import Optional

from .models import Destination


_FAMILIES = {
    "4": socket.AF_INET,
    "6": socket.AF_INET6,
}

_SOCKET_TYPES = {
    "udp": socket.SOCK_DGRAM,
    "tcp": socket.SOCK_STREAM,
}


def dial(destination: Destination, timeout: Optional[float] = None) -> socket.socket:
    """Open a connected socket to destination.

    Each address the host resolves to is tried in turn; the error from the
    last attempt is raised if none connects. For udp, connecting only fixes
    the peer address so later sends need no address.
    """
    family = _FAMILIES.get(destination.network[-1], socket.AF_UNSPEC)
    sock_type = _SOCKET_TYPES[destination.transport]

    last_error: Optional[OSError] = None
    for af, socktype, proto, _, sockaddr in socket.getaddrinfo(
            destination.host, destination.port, family, sock_type):
        sock = socket.socket(af, socktype, proto)
        try:
            if timeout is not None:
                sock.settimeout(timeout)
            sock.connect(sockaddr)
            sock.settimeout(None)
            return sock
        except OSError as e:
            last_error = e
            sock.close()

    if last_error is not None:
        raise last_error
    raise OSError(f"no addresses found for {destination.host}")
