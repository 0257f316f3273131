"""AirDropPro - LAN file and clipboard exchange"""

__version__ = "0.1.0"
