"""Exceptions raised while acquiring policies."""

from typing import Iterable


class PolicyHandlerError(Exception):
    """Base class for errors that abort a policy acquisition."""


class ConfigurationError(PolicyHandlerError):
    """The scan kind of a request could not be resolved."""


class DownloadError(PolicyHandlerError):
    """A required framework or control could not be fetched."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"failed to download policy: {_download_hint(cause)}")


class EmptyResultError(PolicyHandlerError):
    """Every requested policy resolved to nothing."""

    def __init__(self, identifiers: Iterable[str]):
        self.identifiers = list(identifiers)
        super().__init__(
            f"failed to download policies: '{', '.join(self.identifiers)}'. "
            "Make sure the policy exists and is spelled correctly"
        )


class PolicySourceError(Exception):
    """A policy source failed to fetch an artifact."""


def _download_hint(cause: Exception) -> str:
    message = str(cause)
    lowered = message.lower()
    if "unsupported protocol" in lowered or "request url is missing" in lowered:
        return f"{message} (check the configured api_url)"
    if "not found" in lowered:
        return f"{message} (check the policy name)"
    return message
