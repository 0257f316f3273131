"""
Errors and User-Friendly Error Messages

Two tiers of failures exist:
- Startup errors (config, advertisement, listener) abort the process.
- Request errors are turned into a JSON error envelope by the server.

The ErrorCode catalog gives startup failures a description and a
suggestion for how to resolve them.
"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional


class AirDropError(Exception):
    """Base class for all AirDropPro errors"""


# Startup tier

class ConfigError(AirDropError):
    """Configuration is missing, unreadable or invalid"""


class AdvertiseError(AirDropError):
    """The mDNS service record could not be published"""


class ServerStartError(AirDropError):
    """The HTTP listener could not be bound"""


# Request tier

class DecodeError(AirDropError):
    """A path token is not valid URL-safe base64 or not UTF-8"""


class ClipboardError(AirDropError):
    """The system clipboard could not be opened, read or written"""


class UnsupportedClipboardFormat(ClipboardError):
    """The clipboard holds none of the supported content shapes"""

    def __init__(self, message: str = "Unsupported clipboard format"):
        super().__init__(message)


class TransferError(AirDropError):
    """A file upload or download failed"""


class RequestError(AirDropError):
    """The request body could not be parsed"""


@dataclass
class UserError:
    """User-friendly error with message and suggestion"""
    message: str
    suggestion: str
    code: str = ""

    def __str__(self) -> str:
        result = f"Error: {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion
        }


class ErrorCode(Enum):
    """Error codes for categorization"""
    ALREADY_RUNNING = "already_running"
    PORT_IN_USE = "port_in_use"
    PERMISSION_DENIED = "permission_denied"
    INVALID_CONFIG = "invalid_config"
    MDNS_FAILED = "mdns_failed"
    NETWORK_UNREACHABLE = "network_unreachable"
    MISSING_DEPENDENCY = "missing_dependency"
    UNKNOWN = "unknown"


ERROR_MESSAGES = {
    ErrorCode.ALREADY_RUNNING: UserError(
        code="already_running",
        message="Another instance of AirDropPro is already running",
        suggestion="Use the existing instance, or quit it from its tray menu first"
    ),

    ErrorCode.PORT_IN_USE: UserError(
        code="port_in_use",
        message="The configured port is already in use",
        suggestion="Pick another port: 'airdroppro config --set port <PORT>'"
    ),

    ErrorCode.PERMISSION_DENIED: UserError(
        code="permission_denied",
        message="Permission denied when binding the port or accessing a directory",
        suggestion="Use a port above 1024 and check the permissions of the download directory"
    ),

    ErrorCode.INVALID_CONFIG: UserError(
        code="invalid_config",
        message="Configuration file contains invalid values",
        suggestion="Run 'airdroppro config --reset' to restore default settings"
    ),

    ErrorCode.MDNS_FAILED: UserError(
        code="mdns_failed",
        message="Could not advertise the service on the local network",
        suggestion="Make sure multicast traffic (UDP port 5353) is allowed by your firewall"
    ),

    ErrorCode.NETWORK_UNREACHABLE: UserError(
        code="network_unreachable",
        message="No local network address is available",
        suggestion="Connect to a local network and start AirDropPro again"
    ),

    ErrorCode.MISSING_DEPENDENCY: UserError(
        code="missing_dependency",
        message="A required dependency is not installed",
        suggestion="Reinstall the package: 'pip install airdroppro'"
    ),

    ErrorCode.UNKNOWN: UserError(
        code="unknown",
        message="An unexpected error occurred",
        suggestion="Check the log file airdroppro.log in the AirDropPro data directory"
    ),
}


def get_error(code: ErrorCode) -> UserError:
    """Get user-friendly error for a given error code"""
    return ERROR_MESSAGES.get(code, ERROR_MESSAGES[ErrorCode.UNKNOWN])


def get_error_from_exception(exc: BaseException) -> UserError:
    """Map startup exceptions to user-friendly errors"""
    if isinstance(exc, ConfigError):
        return get_error(ErrorCode.INVALID_CONFIG)
    if isinstance(exc, AdvertiseError):
        return get_error(ErrorCode.MDNS_FAILED)
    if isinstance(exc, ImportError):
        return get_error(ErrorCode.MISSING_DEPENDENCY)

    exc_str = str(exc).lower()
    cause = exc.__cause__
    if cause is not None:
        exc_str += " " + str(cause).lower()

    if "address already in use" in exc_str:
        return get_error(ErrorCode.PORT_IN_USE)
    if "permission denied" in exc_str:
        return get_error(ErrorCode.PERMISSION_DENIED)
    if "network is unreachable" in exc_str:
        return get_error(ErrorCode.NETWORK_UNREACHABLE)

    error = get_error(ErrorCode.UNKNOWN)
    return UserError(
        code=error.code,
        message=f"{error.message}: {type(exc).__name__}",
        suggestion=error.suggestion
    )


def format_error(code: ErrorCode, details: Optional[str] = None) -> str:
    """Format error message for display"""
    error = get_error(code)
    result = str(error)
    if details:
        result = f"{result}\n  Details: {details}"
    return result
