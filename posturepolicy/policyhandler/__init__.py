"""Policy acquisition for posture scans."""

from .handler import PolicyHandler, get_scan_kind, policy_identifier_to_list

__all__ = ["PolicyHandler", "get_scan_kind", "policy_identifier_to_list"]
