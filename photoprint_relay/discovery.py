"""
Service Discovery
=================

Advertises the relay as ``_photoprint._tcp`` over mDNS/DNS-SD so the iPad
app finds it without typing an IP address. TXT properties carry the
default printer and the comma-joined printer list.
"""

import socket
from typing import Dict, List, Optional

from zeroconf import ServiceInfo, Zeroconf

from .config import SERVICE_NAME, SERVICE_TYPE
from .logging_config import get_logger
from .models import PrinterInventorySnapshot

logger = get_logger(__name__)

# DNS-SD limit for a single TXT string, key and '=' included
TXT_ENTRY_MAX = 255


def get_local_ips() -> List[str]:
    """Non-loopback IPv4 addresses of this host."""
    addresses = []
    try:
        for info in socket.getaddrinfo(socket.gethostname(), None, socket.AF_INET):
            addr = info[4][0]
            if not addr.startswith('127.') and addr not in addresses:
                addresses.append(addr)
    except socket.gaierror:
        pass

    if not addresses:
        # Route lookup only, nothing is sent
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            try:
                sock.connect(('8.8.8.8', 80))
                addresses.append(sock.getsockname()[0])
            finally:
                sock.close()
        except OSError:
            pass

    return addresses


def _txt_value(key: str, value: str) -> str:
    limit = TXT_ENTRY_MAX - len(key) - 1
    encoded = value.encode('utf-8')
    if len(encoded) <= limit:
        return value
    return encoded[:limit].decode('utf-8', errors='ignore')


def build_properties(snapshot: PrinterInventorySnapshot) -> Dict[str, str]:
    """TXT properties describing the current printer inventory."""
    return {
        'printer': _txt_value('printer', snapshot.default_printer_name or 'default'),
        'printers': _txt_value('printers', ','.join(snapshot.known_printers)),
    }


class ServiceAdvertiser:
    """Registers and updates the relay's mDNS service record."""

    def __init__(self, port: int, name: str = SERVICE_NAME, service_type: str = SERVICE_TYPE,
                 zeroconf: Optional[Zeroconf] = None):
        self.port = port
        self.name = name
        self.service_type = service_type
        self._zeroconf = zeroconf
        self._info: Optional[ServiceInfo] = None

    def _build_info(self, snapshot: PrinterInventorySnapshot) -> ServiceInfo:
        hostname = socket.gethostname().split('.')[0]
        return ServiceInfo(
            self.service_type,
            f'{self.name}.{self.service_type}',
            addresses=[socket.inet_aton(ip) for ip in get_local_ips()],
            port=self.port,
            properties=build_properties(snapshot),
            server=f'{hostname}.local.',
        )

    @property
    def registered(self) -> bool:
        return self._info is not None

    def start(self, snapshot: PrinterInventorySnapshot) -> None:
        """Publish the service record."""
        if self._zeroconf is None:
            self._zeroconf = Zeroconf()
        self._info = self._build_info(snapshot)
        self._zeroconf.register_service(self._info)
        logger.info('Advertising %s with printer="%s"',
                    self.service_type, snapshot.default_printer_name or '')

    def update(self, snapshot: PrinterInventorySnapshot) -> None:
        """Re-publish the record with a new inventory."""
        if self._info is None:
            return
        self._info = self._build_info(snapshot)
        self._zeroconf.update_service(self._info)
        logger.info('Service record updated: printer="%s"', snapshot.default_printer_name or '')

    def stop(self) -> None:
        """Withdraw the record and close the responder."""
        if self._zeroconf is None:
            return
        try:
            if self._info is not None:
                self._zeroconf.unregister_service(self._info)
        finally:
            self._info = None
            self._zeroconf.close()
            self._zeroconf = None
