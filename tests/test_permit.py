"""
Unit tests for permit(): allow-listing keys of a parsed JSON body.
"""
import pytest

from sanitized.services.permit import dropped_keys, permit


BODY = {"id": 1, "name": "Brett", "email": "test@tested.com"}


class TestPermit:

    def test_keeps_only_permitted_keys(self):
        result = permit(BODY, ["name"])
        assert result == {"name": "Brett"}
        assert "id" not in result
        assert "email" not in result

    def test_empty_allow_list_yields_empty_mapping(self):
        assert permit(BODY, []) == {}

    def test_dropped_keys_are_removed_not_nulled(self):
        result = permit(BODY, ["name", "email"])
        assert set(result) == {"name", "email"}

    def test_allowed_keys_missing_from_input_are_not_added(self):
        assert permit({"name": "Brett"}, ["name", "email"]) == {"name": "Brett"}

    def test_result_follows_input_order(self):
        result = permit(BODY, ["email", "name", "id"])
        assert list(result) == ["id", "name", "email"]

    def test_idempotent(self):
        once = permit(BODY, ["name", "email"])
        assert permit(once, ["name", "email"]) == once

    def test_input_not_modified(self):
        body = dict(BODY)
        permit(body, ["name"])
        assert body == BODY

    def test_returns_new_mapping(self):
        body = {"name": "Brett"}
        assert permit(body, ["name"]) is not body

    def test_nested_values_kept_as_is(self):
        body = {"tags": ["a", "b"], "profile": {"admin": True}, "secret": None}
        assert permit(body, ["tags", "profile"]) == {
            "tags": ["a", "b"],
            "profile": {"admin": True},
        }

    @pytest.mark.parametrize("value", [[1, 2, 3], "text", 42, None])
    def test_non_object_returned_unchanged(self, value):
        assert permit(value, ["name"]) == value

    def test_accepts_any_iterable_allow_list(self):
        assert permit(BODY, ("name",)) == {"name": "Brett"}
        assert permit(BODY, frozenset({"email"})) == {"email": "test@tested.com"}


class TestDroppedKeys:

    def test_reports_stripped_names_in_input_order(self):
        body = {"id": 1, "name": "Brett", "is_admin": True}
        assert dropped_keys(body, ["name"]) == ["id", "is_admin"]

    def test_nothing_dropped(self):
        assert dropped_keys({"name": "Brett"}, ["name"]) == []

    def test_non_object_has_no_dropped_keys(self):
        assert dropped_keys([1, 2], ["name"]) == []
