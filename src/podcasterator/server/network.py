"""Local network address discovery."""

import ipaddress
import logging
import socket

logger = logging.getLogger(__name__)

LOOPBACK_PLACEHOLDER = "localhost"

# Any routable address works; connecting a UDP socket sends nothing
_ROUTE_TARGET = ("10.255.255.255", 1)


def _is_usable(address: str) -> bool:
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        return False
    return ip.version == 4 and not ip.is_loopback and not ip.is_unspecified


def _candidate_addresses() -> list[str]:
    candidates = []

    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(_ROUTE_TARGET)
            candidates.append(sock.getsockname()[0])
    except OSError as e:
        logger.debug(f"Route lookup failed: {e}")

    try:
        _, _, addresses = socket.gethostbyname_ex(socket.gethostname())
        candidates.extend(addresses)
    except OSError as e:
        logger.debug(f"Hostname lookup failed: {e}")

    return candidates


def get_local_ip() -> str:
    """Find a non-loopback IPv4 address other devices can reach.

    Returns:
        Dotted IPv4 address, or "localhost" if none was found
    """
    for address in _candidate_addresses():
        if _is_usable(address):
            return address

    logger.warning("No non-loopback address found, falling back to localhost")
    return LOOPBACK_PLACEHOLDER
