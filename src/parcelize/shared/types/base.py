"""
Base Dataclasses for Parcelize

Normalized API records are plain dataclasses: type safety without runtime
validation overhead, since the normalizer already decides every field's
type and default.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BaseDataclass:
    """Common base dataclass for all Parcelize records.

    Records are built by the normalizer, never directly from raw API
    payloads, so unknown API fields never reach the constructor.

    Example:
        >>> from parcelize.shared.utils.dataclass_serialization import to_dict
        >>> to_dict(HubTerms(terms="No refunds"))
        {'terms': 'No refunds'}
    """
