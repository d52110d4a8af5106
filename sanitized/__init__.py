"""
Sanitized - request-body allow-listing and patch semantics for FastAPI/pydantic.
"""
from sanitized.api.errors import register_exception_handlers, sanitize_error_handler
from sanitized.api.request import (
    extract_model,
    patch_model,
    patch_model_by_id,
    read_json_body,
    sanitized_body,
)
from sanitized.services import (
    ConstructionRejected,
    InMemoryStore,
    MissingBodyError,
    NotFoundError,
    Sanitizable,
    SanitizableHooks,
    SanitizedModel,
    SanitizeError,
    SanitizeErrorCode,
    Store,
    ValidationRejected,
    construct,
    dropped_keys,
    fetch_and_merge,
    merge_and_construct,
    permit,
)

__version__ = "0.1.0"

__all__ = [
    "register_exception_handlers",
    "sanitize_error_handler",
    "extract_model",
    "patch_model",
    "patch_model_by_id",
    "read_json_body",
    "sanitized_body",
    "ConstructionRejected",
    "InMemoryStore",
    "MissingBodyError",
    "NotFoundError",
    "Sanitizable",
    "SanitizableHooks",
    "SanitizedModel",
    "SanitizeError",
    "SanitizeErrorCode",
    "Store",
    "ValidationRejected",
    "construct",
    "dropped_keys",
    "fetch_and_merge",
    "merge_and_construct",
    "permit",
]
