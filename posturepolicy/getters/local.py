"""Policy source backed by JSON files on disk.

Used for offline scans and for policies previously written to the cache.
Each policy file holds a framework, a control, or a list of either;
frameworks are told apart from controls by their ``controls`` list.
"""

import json
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, TypeVar, Union

from pydantic import ValidationError

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

logger = get_logger("policy_source.local")

T = TypeVar("T", bound=PolicyArtifact)


class LocalPolicySource(PolicyGetter, ExceptionsGetter, ControlsInputsGetter):
    """Loads policies, exceptions and control inputs from local files."""

    def __init__(
        self,
        policy_paths: Sequence[Union[str, Path]] = (),
        exceptions_path: Optional[Union[str, Path]] = None,
        controls_inputs_path: Optional[Union[str, Path]] = None,
    ):
        self.policy_paths = [Path(p).expanduser() for p in policy_paths]
        self.exceptions_path = Path(exceptions_path).expanduser() if exceptions_path else None
        self.controls_inputs_path = (
            Path(controls_inputs_path).expanduser() if controls_inputs_path else None
        )

    def get_framework(self, name: str) -> Optional[Framework]:
        return self._find(Framework, name)

    def get_control(self, name: str) -> Optional[Control]:
        return self._find(Control, name)

    def get_exceptions(self, cluster_name: str) -> List[PostureExceptionPolicy]:
        if self.exceptions_path is None:
            raise PolicySourceError("No exceptions file configured")

        data = _read_json(self.exceptions_path)
        if not isinstance(data, list):
            data = [data]
        try:
            return [PostureExceptionPolicy.model_validate(item) for item in data]
        except ValidationError as e:
            raise PolicySourceError(
                f"Invalid exceptions file {self.exceptions_path}: {e}"
            ) from e

    def get_controls_inputs(self, cluster_name: str) -> ControlsInputs:
        if self.controls_inputs_path is None:
            raise PolicySourceError("No controls inputs file configured")

        data = _read_json(self.controls_inputs_path)
        if not isinstance(data, dict):
            raise PolicySourceError(
                f"Controls inputs file must hold a mapping: {self.controls_inputs_path}"
            )

        # Accept both a bare mapping and a full customer configuration
        settings = data.get("settings")
        if isinstance(settings, dict) and "postureControlInputs" in settings:
            data = settings["postureControlInputs"]
        return dict(data)

    def _find(self, model: Type[T], name: str) -> Optional[T]:
        """Return the first artifact in the policy files matching name.

        An artifact matches when its name equals the requested one
        (case-insensitive), or when the file it sits alone in is named
        after it.
        """
        wanted = name.lower()

        for path in self.policy_paths:
            data = _read_json(path)
            items = data if isinstance(data, list) else [data]
            for item in items:
                artifact = _validate(model, item, path)
                if artifact is None:
                    continue
                if artifact.name.lower() == wanted:
                    return artifact
                if len(items) == 1 and path.stem.lower() == wanted:
                    return artifact

        logger.debug(f"{model.__name__} {name} not found in {len(self.policy_paths)} file(s)")
        return None


def _validate(model: Type[T], item: Any, path: Path) -> Optional[T]:
    """Validate one item, skipping entries of another artifact kind."""
    if not isinstance(item, dict):
        raise PolicySourceError(f"Unexpected policy entry in {path}")
    if model is Framework and "controls" not in item:
        return None
    if model is Control and "controls" in item:
        return None
    try:
        return model.model_validate(item)
    except ValidationError as e:
        raise PolicySourceError(f"Invalid {model.__name__.lower()} in {path}: {e}") from e


def _read_json(path: Path) -> Any:
    try:
        with path.open("r") as f:
            return json.load(f)
    except OSError as e:
        raise PolicySourceError(f"Cannot read {path}: {e}") from e
    except ValueError as e:
        raise PolicySourceError(f"Invalid JSON in {path}: {e}") from e
