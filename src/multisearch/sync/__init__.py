"""Record-to-document synchronization: options, extraction, eligibility, engine."""

from multisearch.sync.engine import SyncContext, SyncEngine
from multisearch.sync.options import (
    Inline,
    Localized,
    MultisearchOptions,
    Named,
    Plain,
)
from multisearch.sync.record import Multisearchable, localized_attribute, predicate

__all__ = [
    "Inline",
    "Localized",
    "Multisearchable",
    "MultisearchOptions",
    "Named",
    "Plain",
    "SyncContext",
    "SyncEngine",
    "localized_attribute",
    "predicate",
]
