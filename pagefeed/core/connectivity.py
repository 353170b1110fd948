"""Network reachability checks used before every page fetch."""

from __future__ import annotations

import ipaddress
import socket
from typing import Protocol, runtime_checkable

import structlog

log = structlog.get_logger("pagefeed.connectivity")

DEFAULT_PROBE_ADDRESS = "1.1.1.1"
DEFAULT_PROBE_PORT = 53


@runtime_checkable
class ConnectivityGate(Protocol):
    """Reports whether a network path is currently available."""

    def is_available(self) -> bool: ...


class RouteConnectivityGate:
    """Report whether the host currently has a route toward *address*.

    Connecting a UDP socket sends no packet: the kernel only picks a route
    and a source address, so the call returns at once and never blocks the
    event loop. *address* must be an IP literal so no DNS lookup happens.
    Every call checks again; nothing is cached between attempts.
    """

    def __init__(
        self,
        address: str = DEFAULT_PROBE_ADDRESS,
        port: int = DEFAULT_PROBE_PORT,
    ) -> None:
        ip = ipaddress.ip_address(address)
        if not 0 < port < 65536:
            raise ValueError(f"probe port out of range: {port}")
        self.address = str(ip)
        self.port = port
        self._family = socket.AF_INET6 if ip.version == 6 else socket.AF_INET

    def is_available(self) -> bool:
        try:
            with socket.socket(self._family, socket.SOCK_DGRAM) as sock:
                sock.setblocking(False)
                sock.connect((self.address, self.port))
                return True
        except (OSError, ValueError, OverflowError) as exc:
            log.debug(
                "connectivity.unavailable",
                address=self.address,
                port=self.port,
                error=str(exc),
            )
            return False


class StaticConnectivityGate:
    """Gate with a fixed answer, for offline tooling and tests."""

    def __init__(self, available: bool = True) -> None:
        self.available = available

    def is_available(self) -> bool:
        return self.available
