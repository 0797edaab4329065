"""Policy acquisition for security-posture scans.

Fetches compliance frameworks or individual controls from a policy source,
caches them locally, and attaches optional exceptions and control inputs to
a scan session for the evaluation engine.
"""

from .errors import (
    ConfigurationError,
    DownloadError,
    EmptyResultError,
    PolicyHandlerError,
    PolicySourceError,
)
from .models import (
    Control,
    Framework,
    PolicyIdentifier,
    PolicyKind,
    PolicyNotification,
    PostureExceptionPolicy,
    ScanSession,
)
from .policyhandler import PolicyHandler

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Control",
    "DownloadError",
    "EmptyResultError",
    "Framework",
    "PolicyHandler",
    "PolicyHandlerError",
    "PolicyIdentifier",
    "PolicyKind",
    "PolicyNotification",
    "PolicySourceError",
    "PostureExceptionPolicy",
    "ScanSession",
]
