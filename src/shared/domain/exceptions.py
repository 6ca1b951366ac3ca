"""Base exception for business-rule violations.

Aggregates raise subclasses of ``DomainException`` when an invariant
would be broken.  They are never caught inside the domain: the calling
layer translates them into user-facing errors.
"""

from __future__ import annotations


class DomainException(Exception):
    """A business invariant was violated."""
