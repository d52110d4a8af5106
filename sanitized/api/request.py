"""
FastAPI request helpers: read the JSON body and run the sanitize pipeline.

Usage in a route:

    @router.post("/users")
    async def create_user(user: User = Depends(sanitized_body(User))):
        ...

    @router.patch("/users/{user_id}")
    async def update_user(user_id: int, request: Request):
        user = await patch_model_by_id(request, User, user_id, store)
        ...
"""
import json
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Dict, Optional, Type, TypeVar, Union

from fastapi import Request
from pydantic import BaseModel

from sanitized.services.pipeline import construct, fetch_and_merge, merge_and_construct
from sanitized.services.store import Store

M = TypeVar("M", bound=BaseModel)

Injection = Union[Mapping, Callable[[Request], Mapping]]


async def read_json_body(request: Request) -> Optional[Dict[str, Any]]:
    """
    Parse the request body as a JSON object.

    Returns None when the body is empty, is not valid JSON, or is valid
    JSON that is not an object; the pipeline reports all three as a
    missing body.
    """
    raw = await request.body()
    if not raw:
        return None

    try:
        parsed = json.loads(raw)
    except (ValueError, RecursionError):
        # JSONDecodeError and UnicodeDecodeError are both ValueError;
        # pathologically nested bodies exhaust the parser's stack
        return None

    if not isinstance(parsed, dict):
        return None
    return parsed


async def extract_model(
    request: Request,
    model_cls: Type[M],
    injecting: Optional[Mapping] = None,
) -> M:
    """Build a new `model_cls` from the request's JSON body."""
    data = await read_json_body(request)
    return construct(model_cls, data, injecting=injecting)


async def patch_model(
    request: Request,
    model: M,
    pre_validate: Optional[bool] = None,
) -> M:
    """Apply the request's JSON body as a partial update to `model`."""
    data = await read_json_body(request)
    return merge_and_construct(model, data, pre_validate=pre_validate)


async def patch_model_by_id(
    request: Request,
    model_cls: Type[M],
    identifier: Any,
    store: Store,
    pre_validate: Optional[bool] = None,
) -> M:
    """Fetch `identifier` from `store` and patch it with the request body."""
    # The body is always read; fetch_and_merge reports NotFound before MissingBody
    data = await read_json_body(request)
    return fetch_and_merge(model_cls, identifier, data, store, pre_validate=pre_validate)


def sanitized_body(
    model_cls: Type[M],
    injecting: Optional[Injection] = None,
) -> Callable[[Request], Awaitable[M]]:
    """
    FastAPI dependency that yields a sanitized `model_cls` from the body.

    `injecting` may be a mapping or a callable taking the request, for
    server-side values such as the authenticated user's id.
    """

    async def dependency(request: Request) -> M:
        extra = injecting(request) if callable(injecting) else injecting
        return await extract_model(request, model_cls, injecting=extra)

    dependency.__name__ = f"sanitized_{model_cls.__name__.lower()}"
    return dependency
