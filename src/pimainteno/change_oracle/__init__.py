"""Change Oracle - Decides whether a project changed since its last summary."""

from pimainteno.change_oracle.oracle import ChangeOracle, resolve_head

__all__ = [
    "ChangeOracle",
    "resolve_head",
]
