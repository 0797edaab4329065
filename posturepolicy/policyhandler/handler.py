"""Policy acquisition for a scan.

Fetches the frameworks or controls a scan asks for, caches each one, and
attaches the cluster's exceptions and control inputs to the scan session.
A failed framework or control fetch aborts the scan; the exceptions and
control inputs are optional and their failures are ignored.
"""

from typing import List, Optional

from ..cache import CacheStore
from ..common.logger import get_logger
from ..errors import (
    ConfigurationError,
    DownloadError,
    EmptyResultError,
    PolicySourceError,
)
from ..getters.base import PolicyGetters
from ..models import (
    Framework,
    PolicyIdentifier,
    PolicyKind,
    PolicyNotification,
    ScanSession,
)

logger = get_logger("policy_handler")


class PolicyHandler:
    """Loads the policies of a scan request into a scan session."""

    def __init__(
        self,
        getters: PolicyGetters,
        cache: Optional[CacheStore] = None,
        cluster_name: str = "",
    ):
        """Initialize the policy handler.

        Args:
            getters: Sources for policies, exceptions and control inputs
            cache: Cache for fetched artifacts (default location if None)
            cluster_name: Scope used when fetching exceptions and control inputs
        """
        self.getters = getters
        self.cache = cache if cache is not None else CacheStore()
        self.cluster_name = cluster_name

    def get_policies(
        self, notification: PolicyNotification, session: ScanSession
    ) -> None:
        """Fetch the requested policies and populate the session.

        Args:
            notification: Requested frameworks or controls
            session: Scan session to populate

        Raises:
            ConfigurationError: If the scan kind cannot be resolved
            DownloadError: If a framework or control fetch fails
            EmptyResultError: If nothing could be fetched
        """
        logger.info("Downloading/Loading policy definitions")

        policies = self.get_scan_policies(notification)
        if not policies:
            raise EmptyResultError(policy_identifier_to_list(notification.rules))

        session.policies = policies

        self.load_overlays(session)

        logger.info("Downloaded/Loaded policy")

    def get_scan_policies(self, notification: PolicyNotification) -> List[Framework]:
        """Fetch every requested policy in order.

        Frameworks are returned as fetched. Controls are gathered into a
        single unnamed framework. Policies the source reports as missing are
        skipped.

        Raises:
            ConfigurationError: If the scan kind cannot be resolved
            DownloadError: On the first failed fetch
        """
        kind = get_scan_kind(notification)
        frameworks: List[Framework] = []

        if kind == PolicyKind.FRAMEWORK:
            for rule in notification.rules:
                try:
                    framework = self.getters.policy_getter.get_framework(rule.name)
                except PolicySourceError as e:
                    raise DownloadError(e) from e
                if framework is None:
                    logger.debug(f"Framework not found: {rule.name}")
                    continue
                frameworks.append(framework)
                self.cache.save(rule.name, framework)

        elif kind == PolicyKind.CONTROL:
            controls_framework = Framework()
            for rule in notification.rules:
                try:
                    control = self.getters.policy_getter.get_control(rule.name)
                except PolicySourceError as e:
                    raise DownloadError(e) from e
                if control is None:
                    logger.debug(f"Control not found: {rule.name}")
                    continue
                controls_framework.controls.append(control)
                self.cache.save(rule.name, control)
            if controls_framework.controls:
                frameworks.append(controls_framework)

        else:
            requested = str(notification.rules[0].kind) if notification.rules else "none"
            raise ConfigurationError(f"unknown policy kind: {requested}")

        return frameworks

    def load_overlays(self, session: ScanSession) -> None:
        """Attach the cluster's exceptions and control inputs, if available."""
        try:
            session.exceptions = self.getters.exceptions_getter.get_exceptions(
                self.cluster_name
            )
        except Exception as e:
            logger.debug(f"Skipping exceptions: {e}")

        try:
            session.controls_inputs = (
                self.getters.controls_inputs_getter.get_controls_inputs(
                    self.cluster_name
                )
            )
        except Exception as e:
            logger.debug(f"Skipping controls inputs: {e}")


def get_scan_kind(notification: PolicyNotification) -> Optional[PolicyKind]:
    """Return whether a request addresses frameworks or controls.

    The first requested policy decides. Returns None for an empty request or
    any other kind.
    """
    if not notification.rules:
        return None
    kind = notification.rules[0].kind
    if kind in (PolicyKind.FRAMEWORK, PolicyKind.CONTROL):
        return kind
    return None


def policy_identifier_to_list(rules: List[PolicyIdentifier]) -> List[str]:
    """Render identifiers as ``"<kind>: <name>"``."""
    return [str(rule) for rule in rules]
