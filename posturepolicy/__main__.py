"""CLI interface for policy acquisition."""

import os
import sys

from .cache import CacheStore
from .common.config import DEFAULT_CONFIG_PATH, PolicyFetchConfig, load_typed_config
from .common.logger import setup_logger
from .errors import PolicyHandlerError
from .getters.registry import build_getters
from .models import PolicyKind, PolicyNotification, ScanSession
from .policyhandler import PolicyHandler

KINDS = {
    "framework": PolicyKind.FRAMEWORK,
    "control": PolicyKind.CONTROL,
}

USAGE = "Usage: python -m posturepolicy <framework|control> <name> [<name> ...]"


def main(argv=None) -> int:
    """Main entry point for the policy acquisition CLI."""
    args = sys.argv[1:] if argv is None else argv

    if len(args) < 2 or args[0].lower() not in KINDS:
        print(USAGE, file=sys.stderr)
        return 2

    kind = KINDS[args[0].lower()]
    names = [name for arg in args[1:] for name in arg.split(",") if name]

    config_path = os.environ.get("POSTUREPOLICY_CONFIG", DEFAULT_CONFIG_PATH)
    try:
        config = load_typed_config(config_path)
    except FileNotFoundError:
        # Use defaults if config not found
        config = PolicyFetchConfig()

    setup_logger(
        log_dir=config.logging.log_dir,
        level=config.logging.level,
        file_logging=config.logging.file_logging,
    )

    try:
        getters = build_getters(config.source)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    handler = PolicyHandler(
        getters,
        cache=CacheStore(config.cache.cache_dir, enabled=config.cache.enabled),
        cluster_name=config.cluster_name,
    )

    session = ScanSession()
    try:
        handler.get_policies(PolicyNotification.for_names(kind, names), session)
    except PolicyHandlerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for framework in session.policies:
        print(f"Framework: {framework.name or '(controls)'}")
        print(f"Controls: {len(framework.controls)}")
    print(f"Exceptions: {'loaded' if session.exceptions is not None else 'none'}")
    print(f"Controls inputs: {'loaded' if session.controls_inputs is not None else 'none'}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
