"""
Sanitize pipeline: permit -> construct | merge + construct.

Each operation returns a validated record or raises exactly one
SanitizeError; the first failing step wins and nothing partial is returned.
All operations are synchronous and hold no shared state apart from metrics.
"""
from collections.abc import Mapping
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Type, TypeVar

from pydantic import BaseModel

from sanitized.core.config import get_settings
from sanitized.core.logging import get_safe_logger
from sanitized.core.metrics import get_metrics_collector
from sanitized.services.exceptions import (
    ConstructionRejected,
    MissingBodyError,
    NotFoundError,
    SanitizeError,
)
from sanitized.services.permit import dropped_keys, permit
from sanitized.services.sanitizable import (
    describe_construction_error,
    mark_existing,
    permitted_fields,
    run_post_validate,
    run_pre_validate,
)
from sanitized.services.store import Store

logger = get_safe_logger(__name__)

M = TypeVar("M", bound=BaseModel)


@contextmanager
def _track(operation: str, model_cls: type) -> Iterator[None]:
    """Record the outcome of one pipeline call in metrics and logs."""
    metrics = get_metrics_collector()
    try:
        yield
    except SanitizeError as e:
        metrics.record_operation(operation, success=False, error_code=e.error_code.value)
        logger.warning(
            "Sanitize pipeline rejected input",
            operation=operation,
            model=model_cls.__name__,
            error_code=e.error_code.value,
            status_code=e.status_code
        )
        raise
    metrics.record_operation(operation, success=True)


def _require_body(data: Any) -> Mapping:
    """None or a non-object JSON value means there is no usable body."""
    if not isinstance(data, Mapping):
        raise MissingBodyError()
    return data


def _permit_body(model_cls: type, data: Mapping, operation: str) -> Dict[str, Any]:
    allowed = permitted_fields(model_cls)
    permitted = permit(data, allowed)

    stripped = dropped_keys(data, allowed)
    if stripped:
        get_metrics_collector().record_dropped(len(stripped))
        if get_settings().log_dropped_keys:
            logger.debug(
                "Stripped non-permitted keys",
                operation=operation,
                model=model_cls.__name__,
                dropped_count=len(stripped),
                dropped_keys=",".join(stripped)
            )
    return permitted


def _build(model_cls: Type[M], data: Dict[str, Any]) -> M:
    try:
        return model_cls.model_validate(data)
    except (TypeError, ValueError) as e:
        # pydantic.ValidationError is a ValueError; its text may echo input
        raise ConstructionRejected(describe_construction_error(model_cls, e)) from e


def construct(
    model_cls: Type[M],
    data: Optional[Mapping],
    injecting: Optional[Mapping] = None,
) -> M:
    """
    Build a new record from an untrusted mapping.

    Args:
        model_cls: Record type declaring `permitted`
        data: Parsed request body, or None if absent/unparseable
        injecting: Server-side values overlaid onto `data` before permit;
            injected keys outside `permitted` are dropped like any other

    Returns:
        The validated record, not flagged as existing.

    Raises:
        MissingBodyError: `data` is None or not a JSON object
        ValidationRejected: pre_validate or post_validate rejected the input
        ConstructionRejected: model_validate failed
    """
    with _track("construct", model_cls):
        body = _require_body(data)
        if injecting:
            body = {**body, **injecting}

        permitted = _permit_body(model_cls, body, "construct")
        run_pre_validate(model_cls, permitted)

        record = _build(model_cls, permitted)
        run_post_validate(record)
        return record


def _merge(
    model: M,
    data: Optional[Mapping],
    pre_validate: Optional[bool],
    operation: str,
) -> M:
    model_cls = type(model)
    body = _require_body(data)
    permitted = _permit_body(model_cls, body, operation)

    merged = model.model_dump(by_alias=True)
    merged.update(permitted)

    if pre_validate is None:
        pre_validate = get_settings().pre_validate_on_patch
    if pre_validate:
        run_pre_validate(model_cls, merged)

    record = _build(model_cls, merged)
    mark_existing(record)
    run_post_validate(record)
    return record


def merge_and_construct(
    model: M,
    data: Optional[Mapping],
    pre_validate: Optional[bool] = None,
) -> M:
    """
    Patch an existing record with an untrusted mapping.

    Permitted keys from `data` overwrite the record's serialized form; all
    other fields (including non-permitted ones such as `id`) are carried over.
    `model` itself is not modified.

    Args:
        model: The current record
        data: Parsed request body, or None if absent/unparseable
        pre_validate: Run pre_validate on the merged mapping; None uses
            Settings.pre_validate_on_patch

    Returns:
        A new validated record flagged as existing.
    """
    with _track("merge", type(model)):
        return _merge(model, data, pre_validate, "merge")


def fetch_and_merge(
    model_cls: Type[M],
    identifier: Any,
    data: Optional[Mapping],
    store: Store,
    pre_validate: Optional[bool] = None,
) -> M:
    """
    Look up a record by identifier, then patch it with `data`.

    Raises:
        NotFoundError: the store has no such record (checked before the body)
    """
    with _track("fetch_and_merge", model_cls):
        existing = store.find(model_cls, identifier)
        if existing is None:
            raise NotFoundError()
        return _merge(existing, data, pre_validate, "fetch_and_merge")
