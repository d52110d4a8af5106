"""
Sanitize pipeline services.
Permit, construct and patch records from untrusted request bodies.
"""
from sanitized.services.exceptions import (
    ConstructionRejected,
    MissingBodyError,
    NotFoundError,
    SanitizeError,
    SanitizeErrorCode,
    ValidationRejected,
)
from sanitized.services.permit import dropped_keys, permit
from sanitized.services.pipeline import construct, fetch_and_merge, merge_and_construct
from sanitized.services.sanitizable import Sanitizable, SanitizableHooks, SanitizedModel
from sanitized.services.store import InMemoryStore, Store

__all__ = [
    "ConstructionRejected",
    "MissingBodyError",
    "NotFoundError",
    "SanitizeError",
    "SanitizeErrorCode",
    "ValidationRejected",
    "dropped_keys",
    "permit",
    "construct",
    "fetch_and_merge",
    "merge_and_construct",
    "Sanitizable",
    "SanitizableHooks",
    "SanitizedModel",
    "InMemoryStore",
    "Store",
]
