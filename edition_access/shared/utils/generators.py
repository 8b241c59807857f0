"""Primary key generation."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """New CUID2 string, used for every row id (roles, grants, delegate access)."""
    return str(_next_cuid())
