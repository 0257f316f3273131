"""
Service advertisement using mDNS/Zeroconf (Bonjour)

Publishes an _http._tcp record so devices on the LAN can find the
transfer server without knowing its address.
"""
import socket
import logging
import time
from typing import Callable, Optional

from zeroconf import ServiceInfo, Zeroconf

from airdroppro import config
from .errors import AdvertiseError

logger = logging.getLogger(__name__)


def normalize_host_label(host_name: str) -> str:
    """'MyHost' -> 'MyHost.local.'; names already ending in '.local.' are kept"""
    if host_name.endswith(config.HOST_SUFFIX):
        return host_name
    return f"{host_name}{config.HOST_SUFFIX}"


def get_local_ip() -> str:
    """
    Get the address of the interface used for outbound traffic.

    Raises:
        OSError: if no network interface is usable yet
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        # Doesn't actually connect, just determines the local interface
        s.connect(('8.8.8.8', 80))
        return s.getsockname()[0]
    finally:
        s.close()


class ServiceAdvertiser:
    """
    Publishes this host's service record.

    The record lives until close() is called at process shutdown.
    """

    def __init__(self,
                 zeroconf_factory: Callable[[], Zeroconf] = Zeroconf,
                 ip_resolver: Callable[[], str] = get_local_ip,
                 retry_interval: float = config.IP_RETRY_INTERVAL,
                 sleep: Callable[[float], None] = time.sleep):
        self._zeroconf_factory = zeroconf_factory
        self._ip_resolver = ip_resolver
        self._retry_interval = retry_interval
        self._sleep = sleep

        self.zeroconf: Optional[Zeroconf] = None
        self.service_info: Optional[ServiceInfo] = None

    def wait_for_local_ip(self) -> str:
        """Poll until the machine has a local address. Never gives up."""
        attempt = 0
        while True:
            attempt += 1
            try:
                ip = self._ip_resolver()
                if ip:
                    return ip
                logger.warning("No local IP address yet")
            except OSError as e:
                logger.warning(f"Failed to get local IP address (attempt {attempt}): {e}")
            self._sleep(self._retry_interval)

    def publish(self, host_name: str, port: int) -> ServiceInfo:
        """
        Register the service record.

        Raises:
            AdvertiseError: if the mDNS daemon cannot be created or the
                record cannot be registered
        """
        logger.info(f"Publishing service for host '{host_name}' on port {port}")

        ip = self.wait_for_local_ip()
        host_label = normalize_host_label(host_name)

        try:
            self.zeroconf = self._zeroconf_factory()
        except Exception as e:
            raise AdvertiseError("Failed to create service daemon") from e

        try:
            self.service_info = ServiceInfo(
                config.SERVICE_TYPE,
                f"{config.SERVICE_INSTANCE}.{config.SERVICE_TYPE}",
                addresses=[socket.inet_aton(ip)],
                port=port,
                properties={},
                server=host_label,
            )
        except Exception as e:
            raise AdvertiseError("Failed to create service") from e

        try:
            self.zeroconf.register_service(self.service_info)
        except Exception as e:
            raise AdvertiseError("Failed to register service") from e

        logger.info(f"Registered service {self.service_info.name} as {host_label} at {ip}:{port}")
        return self.service_info

    def close(self):
        """Unregister the record and stop the mDNS daemon"""
        if self.zeroconf is None:
            return

        try:
            if self.service_info:
                self.zeroconf.unregister_service(self.service_info)
        finally:
            self.zeroconf.close()
            self.zeroconf = None
            self.service_info = None
            logger.info("Service advertisement stopped")
