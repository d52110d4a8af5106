"""
Tests for the record contract helpers and SanitizedModel.
"""
from typing import ClassVar, Tuple

import pytest
from pydantic import BaseModel, Field, PrivateAttr

from sanitized.services.sanitizable import (
    Sanitizable,
    SanitizableHooks,
    SanitizedModel,
    describe_construction_error,
    mark_existing,
    permitted_fields,
)

from sample_records import Note, User


class Tagged(BaseModel):
    label: str
    _exists: bool = PrivateAttr(default=False)

    permitted: ClassVar[Tuple[str, ...]] = ("label",)


def test_record_types_satisfy_protocol():
    assert isinstance(User(name="Brett", email="test@tested.com"), Sanitizable)
    assert isinstance(Note(title="Hello"), Sanitizable)


def test_permitted_fields():
    assert permitted_fields(User) == ("name", "email")


def test_permitted_fields_rejects_bare_string():
    class Broken(BaseModel):
        permitted: ClassVar[str] = "name"

    with pytest.raises(TypeError):
        permitted_fields(Broken)


def test_sanitized_model_default_permitted_is_empty():
    class Empty(SanitizedModel):
        name: str = "x"

    assert permitted_fields(Empty) == ()


def test_sanitized_model_populates_by_name_or_alias():
    class Aliased(SanitizedModel):
        display_name: str = Field(..., alias="displayName")

    assert Aliased(displayName="a").display_name == "a"
    assert Aliased(display_name="b").display_name == "b"


def test_mark_existing_on_sanitized_model():
    user = User(name="Brett", email="test@tested.com")
    assert user.exists is False
    mark_existing(user)
    assert user.exists is True


def test_mark_existing_on_private_attribute():
    tagged = Tagged(label="a")
    mark_existing(tagged)
    assert tagged._exists is True


def test_mark_existing_without_flag_is_noop():
    note = Note(title="Hello")
    mark_existing(note)
    assert not hasattr(note, "exists")
    assert "_exists" not in Note.__private_attributes__


def test_describe_construction_error_default():
    assert describe_construction_error(Note, ValueError("boom")) == "Bad request"


def test_describe_construction_error_hook():
    assert describe_construction_error(User, ValueError("boom")) == "Username not provided."


def test_describe_construction_error_empty_hook_falls_back():
    class Quiet(Note):
        @classmethod
        def describe_construction_error(cls, error):
            return ""

    assert describe_construction_error(Quiet, ValueError("boom")) == "Bad request"


@pytest.mark.parametrize(
    "hook",
    ["exists", "pre_validate", "post_validate", "describe_construction_error", "mark_existing"],
)
def test_user_implements_every_declared_hook(hook):
    assert hasattr(SanitizableHooks, hook)
    assert hasattr(User, hook)


def test_hook_protocol_extends_record_contract():
    assert Sanitizable in SanitizableHooks.__mro__
    with pytest.raises(TypeError):
        isinstance(User(name="Brett", email="test@tested.com"), SanitizableHooks)
