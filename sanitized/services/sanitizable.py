"""
Record type contract for the sanitize pipeline.

A record type is any pydantic model that declares `permitted`. It may
optionally provide these hooks; the pipeline supplies defaults for the
ones it lacks:

    pre_validate(cls, data)               classmethod, raise ValidationRejected to reject
    post_validate(self)                   raise ValidationRejected to reject
    describe_construction_error(cls, err) classmethod, client-safe message
    mark_existing(self)                   flag the record as a stored entity

Precondition for patching: model_dump(by_alias=True) must round-trip
through model_validate for the record type.
"""
from typing import Any, ClassVar, Dict, Optional, Protocol, Sequence, Tuple, runtime_checkable

from pydantic import BaseModel, PrivateAttr

from sanitized.core.config import get_settings


@runtime_checkable
class Sanitizable(Protocol):
    """A record type whose JSON input is restricted to `permitted` keys."""

    # Wire (alias) names accepted from request bodies
    permitted: ClassVar[Sequence[str]]


class SanitizableHooks(Sanitizable, Protocol):
    """
    Full hook signatures for type checkers.

    Not runtime checkable: every hook is optional, and the pipeline falls
    back to a default for each one a record type omits.
    """

    @property
    def exists(self) -> bool: ...

    @classmethod
    def pre_validate(cls, data: Dict[str, Any]) -> None: ...

    def post_validate(self) -> None: ...

    @classmethod
    def describe_construction_error(cls, error: Exception) -> str: ...

    def mark_existing(self) -> None: ...


class SanitizedModel(BaseModel):
    """
    Convenience base for record types.
    Adds the `exists` flag; hooks are still optional.
    """

    permitted: ClassVar[Tuple[str, ...]] = ()

    _exists: bool = PrivateAttr(default=False)

    @property
    def exists(self) -> bool:
        """True when the record represents an already-stored entity."""
        return self._exists

    def mark_existing(self) -> None:
        self._exists = True

    class Config:
        populate_by_name = True


def permitted_fields(model_cls: type) -> Tuple[str, ...]:
    """Return the record type's allow-list; raise TypeError if it has none."""
    fields = getattr(model_cls, "permitted", None)
    if fields is None:
        raise TypeError(f"{model_cls.__name__} does not declare 'permitted' fields")
    if isinstance(fields, str):
        # A bare string would otherwise be split into characters
        raise TypeError(f"{model_cls.__name__}.permitted must be a sequence of names, not str")
    return tuple(fields)


def run_pre_validate(model_cls: type, data: Dict[str, Any]) -> None:
    hook = getattr(model_cls, "pre_validate", None)
    if hook is not None:
        hook(data)


def run_post_validate(record: Any) -> None:
    hook = getattr(record, "post_validate", None)
    if hook is not None:
        hook()


def describe_construction_error(model_cls: type, error: Exception) -> str:
    """
    Client-facing message for a failed construction.
    Falls back to the configured generic message; never echoes `error`.
    """
    hook = getattr(model_cls, "describe_construction_error", None)
    message: Optional[str] = hook(error) if hook is not None else None
    return message or get_settings().construction_error_message


def mark_existing(record: Any) -> None:
    """Flag a record as representing a stored entity."""
    marker = getattr(record, "mark_existing", None)
    if callable(marker):
        marker()
        return

    private_attrs = getattr(type(record), "__private_attributes__", None) or {}
    if "_exists" in private_attrs:
        record._exists = True

