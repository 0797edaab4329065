"""Local cache of fetched policy artifacts.

Every framework or control fetched for a scan is written to
``<cache_dir>/<name>.json`` so later runs can load it from disk. Caching is
best effort: a failed write is logged and never stops the scan.
"""

import json
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel

from .common.config import DEFAULT_CACHE_DIR
from .common.logger import get_logger

logger = get_logger("policy_cache")


class CacheStore:
    """Writes policy artifacts under a cache directory."""

    def __init__(self, cache_dir: Union[str, Path] = DEFAULT_CACHE_DIR, enabled: bool = True):
        self.cache_dir = Path(cache_dir).expanduser()
        self.enabled = enabled

    def default_path(self, file_name: str) -> Path:
        """Resolve the cache location for a file name."""
        return self.cache_dir / file_name

    def save(self, name: str, artifact: Any) -> None:
        """Cache an artifact under ``<name>.json``.

        Args:
            name: Name the artifact was requested by
            artifact: Artifact to serialize
        """
        if not self.enabled:
            return

        location = self.default_path(f"{name}.json")
        try:
            save_in_file(artifact, location)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(
                f"Failed to cache file: {location}: {e}",
                extra={"location": str(location), "cause": str(e)},
            )
            return

        logger.debug(f"Cached {name} at {location}")


def save_in_file(artifact: Any, path: Union[str, Path]) -> None:
    """Serialize an artifact as JSON and write it to path.

    Args:
        artifact: pydantic model or JSON-serializable object
        path: Destination file

    Raises:
        OSError: If the file cannot be written
        TypeError: If the artifact is not serializable
    """
    if isinstance(artifact, BaseModel):
        data = artifact.model_dump(mode="json", by_alias=True)
    else:
        data = artifact

    content = json.dumps(data, indent=2)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
