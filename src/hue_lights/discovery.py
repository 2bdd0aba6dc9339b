"""Find a Hue bridge on the local network via SSDP."""

import ipaddress
import logging
import re
import socket
import time
from typing import List, Optional
from xml.etree import ElementTree

import httpx

from .config import BRIDGE_NAME_PATTERN, SSDP_SEARCH_TARGET, config
from .exceptions import HueDiscoveryError

logger = logging.getLogger(__name__)

SSDP_ADDR = ("239.255.255.250", 1900)

_LOCATION_HEADER = re.compile(r"^location:\s*(\S+)\s*$", re.IGNORECASE | re.MULTILINE)
_BRIDGE_NAME = re.compile(BRIDGE_NAME_PATTERN)


def _search_message(search_target: str, mx: int) -> bytes:
    return (
        "M-SEARCH * HTTP/1.1\r\n"
        f"HOST: {SSDP_ADDR[0]}:{SSDP_ADDR[1]}\r\n"
        'MAN: "ssdp:discover"\r\n'
        f"ST: {search_target}\r\n"
        f"MX: {mx}\r\n"
        "\r\n"
    ).encode("utf-8")


def parse_location(response: str) -> Optional[str]:
    """Return the LOCATION header of an SSDP response, if present."""
    match = _LOCATION_HEADER.search(response)
    return match.group(1) if match else None


def ssdp_search(
    search_target: str = SSDP_SEARCH_TARGET,
    timeout: Optional[float] = None,
    mx: int = 3,
) -> List[str]:
    """Send one M-SEARCH and collect description URLs until ``timeout`` expires."""
    timeout = timeout or config.discovery_timeout
    deadline = time.monotonic() + timeout
    locations: List[str] = []

    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
    try:
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, 2)
        sock.settimeout(timeout)
        sock.sendto(_search_message(search_target, mx), SSDP_ADDR)
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            sock.settimeout(remaining)
            try:
                data, addr = sock.recvfrom(65535)
            except socket.timeout:
                break
            location = parse_location(data.decode("utf-8", errors="ignore"))
            if location and location not in locations:
                logger.debug(f"SSDP response from {addr[0]}: {location}")
                locations.append(location)
    finally:
        sock.close()

    return locations


def friendly_name(document: str) -> Optional[str]:
    """Text of the first ``friendlyName`` element of a UPnP description."""
    root = ElementTree.fromstring(document)
    for element in root.iter():
        # Tags carry the UPnP namespace, e.g. {urn:schemas-upnp-org:device-1-0}friendlyName
        if element.tag.rsplit("}", 1)[-1] == "friendlyName":
            return (element.text or "").strip()
    return None


def _is_bridge(location: str, timeout: float) -> bool:
    try:
        response = httpx.get(location, timeout=timeout)
        name = friendly_name(response.text)
    except httpx.HTTPError as e:
        logger.debug(f"Skipping {location}: {e}")
        return False
    except ElementTree.ParseError as e:
        logger.debug(f"Skipping {location}: unreadable description ({e})")
        return False

    if name is None:
        logger.debug(f"Skipping {location}: no friendlyName")
        return False
    return bool(_BRIDGE_NAME.match(name))


def location_ipv4(location: str) -> Optional[str]:
    """IPv4 host of a description URL, or None if the host is not one."""
    try:
        host = httpx.URL(location).host
        return str(ipaddress.IPv4Address(host))
    except (httpx.InvalidURL, ValueError):
        return None


def discover_ip(
    timeout: Optional[float] = None, fetch_timeout: Optional[float] = None
) -> str:
    """Return the IPv4 address of the first Hue bridge found on the network.

    ``timeout`` bounds the SSDP listen window, ``fetch_timeout`` each
    description download. Raises ``HueDiscoveryError`` when nothing answering
    as a Philips hue bridge responds within the discovery window.
    """
    if fetch_timeout is None:
        fetch_timeout = config.timeout
    for location in ssdp_search(SSDP_SEARCH_TARGET, timeout=timeout):
        ip = location_ipv4(location)
        if ip is None:
            logger.debug(f"Skipping {location}: no IPv4 address in location")
            continue
        if _is_bridge(location, fetch_timeout):
            logger.info(f"Found Hue bridge at {ip}")
            return ip

    raise HueDiscoveryError("No Hue bridge found on this network")
