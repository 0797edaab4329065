"""Policy source backed by the posture management HTTP API."""

from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from ..common.config import DEFAULT_API_URL
from ..common.logger import get_logger
from ..errors import PolicySourceError
from ..models import (
    Control,
    ControlsInputs,
    Framework,
    PolicyArtifact,
    PostureExceptionPolicy,
)
from .base import ControlsInputsGetter, ExceptionsGetter, PolicyGetter

logger = get_logger("policy_source.remote")

FRAMEWORKS_PATH = "/api/v1/armoFrameworks"
CONTROLS_PATH = "/api/v1/armoControls"
EXCEPTIONS_PATH = "/api/v1/armoPostureExceptions"
CUSTOMER_CONFIG_PATH = "/api/v1/armoCustomerConfiguration"

T = TypeVar("T", bound=PolicyArtifact)


class RemotePolicySource(PolicyGetter, ExceptionsGetter, ControlsInputsGetter):
    """Fetches policies, exceptions and control inputs over HTTP."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        account_id: str = "",
        token: Optional[str] = None,
        timeout: int = 30,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize the remote source.

        Args:
            api_url: Base URL of the API
            account_id: Customer GUID sent with every request
            token: Optional bearer token
            timeout: Request timeout in seconds
            client: Pre-built HTTP client (mainly for testing)
        """
        self.api_url = api_url.rstrip("/")
        self.account_id = account_id

        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        if client is None:
            client = httpx.Client(base_url=self.api_url, timeout=timeout)
        client.headers.update(headers)
        self.client = client

    def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        self.client.close()

    def __enter__(self) -> "RemotePolicySource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def get_framework(self, name: str) -> Optional[Framework]:
        data = self._get(FRAMEWORKS_PATH, {"frameworkName": name}, allow_missing=True)
        if data is None:
            return None
        return self._parse(Framework, data, f"framework {name}")

    def get_control(self, name: str) -> Optional[Control]:
        data = self._get(CONTROLS_PATH, {"controlName": name}, allow_missing=True)
        if data is None:
            return None
        return self._parse(Control, data, f"control {name}")

    def get_exceptions(self, cluster_name: str) -> List[PostureExceptionPolicy]:
        data = self._get(EXCEPTIONS_PATH, {"clusterName": cluster_name})
        if data is None:
            return []
        if not isinstance(data, list):
            raise PolicySourceError(
                f"Expected a list of exceptions, got {type(data).__name__}"
            )
        return [
            self._parse(PostureExceptionPolicy, item, "posture exception")
            for item in data
        ]

    def get_controls_inputs(self, cluster_name: str) -> ControlsInputs:
        data = self._get(CUSTOMER_CONFIG_PATH, {"clusterName": cluster_name})
        if not isinstance(data, dict):
            raise PolicySourceError("Invalid customer configuration response")

        settings = data.get("settings") or {}
        inputs = settings.get("postureControlInputs")
        if inputs is None:
            raise PolicySourceError(
                f"No control inputs configured for cluster: {cluster_name}"
            )
        return dict(inputs)

    def _get(
        self, path: str, params: Dict[str, str], allow_missing: bool = False
    ) -> Any:
        """Issue a GET request and decode the JSON body.

        Returns None for a 404 when ``allow_missing`` is set.
        """
        query = dict(params)
        if self.account_id:
            query["customerGUID"] = self.account_id

        logger.debug(f"GET {path} {params}")
        try:
            response = self.client.get(path, params=query)
        except httpx.HTTPError as e:
            raise PolicySourceError(f"Request to {path} failed: {e}") from e

        if response.status_code == 404 and allow_missing:
            logger.debug(f"Not found: {path} {params}")
            return None

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PolicySourceError(
                f"{path} returned HTTP {response.status_code}"
            ) from e

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise PolicySourceError(f"Invalid JSON from {path}: {e}") from e

    @staticmethod
    def _parse(model: Type[T], data: Any, what: str) -> T:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise PolicySourceError(f"Invalid {what}: {e}") from e
