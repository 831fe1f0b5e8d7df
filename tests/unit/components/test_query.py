"""
Unit tests for the restricted path query language.
"""

import pytest
from jsonbench.config import LimitsConfig
from jsonbench.errors import PathError
from jsonbench.query import evaluate_path

LIMITS = LimitsConfig()

DOC = {
    "name": "Ada",
    "address": {"city": "London", "zip": None},
    "tags": ["math", "code", "poetry"],
    "matrix": [[1, 2], [3, 4]],
    "scores": {"0": "zero", "1": "one"},
}


def q(doc, path):
    return evaluate_path(doc, path, LIMITS)


class TestRoot:
    def test_root_returns_document_unchanged(self):
        assert q(DOC, "$") is DOC

    def test_root_of_scalar(self):
        assert q(7, "$") == 7

    def test_leading_root_is_optional(self):
        assert q(DOC, "name") == "Ada"
        assert q(DOC, "$name") == "Ada"
        assert q(DOC, "$.name") == "Ada"


class TestKeysAndIndexes:
    def test_nested_keys(self):
        assert q({"a": {"b": 1}}, "$.a.b") == 1

    def test_indexed_key(self):
        assert q({"a": [1, 2, 3]}, "$.a[1]") == 2

    def test_bare_index(self):
        assert q(["x", "y"], "$[1]") == "y"
        assert q(DOC, "$.matrix.[1]") == [3, 4]

    def test_null_member_is_found(self):
        assert q(DOC, "$.address.zip") is None

    def test_numeric_key_on_array(self):
        assert q(DOC, "$.tags.2") == "poetry"

    def test_index_on_object_uses_decimal_key(self):
        assert q(DOC, "$.scores[1]") == "one"

    def test_result_aliases_source(self):
        assert q(DOC, "$.address") is DOC["address"]


class TestWildcard:
    def test_object_values(self):
        assert q({"a": 1, "b": 2}, "$.*") == [1, 2]

    def test_array_elements(self):
        assert q(DOC, "$.tags.*") == ["math", "code", "poetry"]

    def test_segments_after_wildcard_apply_to_the_list(self):
        # not distributed over the elements
        assert q(DOC, "$.matrix.*.[1]") == [3, 4]
        assert q(DOC, "$.tags.*.0") == "math"
        with pytest.raises(PathError, match="not found"):
            q({"a": {"x": 1}, "b": {"x": 2}}, "$.*.x")

    def test_wildcard_on_scalar_is_not_found(self):
        with pytest.raises(PathError, match="not found"):
            q(DOC, "$.name.*")


class TestErrors:
    @pytest.mark.parametrize("path", [
        "$.__proto__",
        "$.constructor",
        "$.a.prototype.b",
        "$.myconstructorKey",
        "__proto__[0]",
    ])
    def test_reserved_tokens_rejected_anywhere(self, path):
        with pytest.raises(PathError, match="invalid path"):
            q({"myconstructorKey": 1}, path)

    def test_missing_key(self):
        with pytest.raises(PathError, match="not found") as exc:
            q(DOC, "$.address.country")
        assert exc.value.segment == "country"
        assert exc.value.position == 1

    def test_index_past_end(self):
        with pytest.raises(PathError, match="not found"):
            q(DOC, "$.tags[3]")

    def test_missing_key_before_index(self):
        with pytest.raises(PathError, match="not found"):
            q(DOC, "$.nope[0]")

    @pytest.mark.parametrize("path", ["$.tags[-1]", "$.tags[x]", "$.tags[]", "$.tags[10001]"])
    def test_invalid_index(self, path):
        with pytest.raises(PathError, match="invalid index"):
            q(DOC, path)

    def test_upper_index_bound_is_inclusive(self):
        doc = {"a": list(range(10001))}
        assert q(doc, "$.a[10000]") == 10000

    @pytest.mark.parametrize("path", ["$.tags[1", "$.tags]", "$.matrix[0][1]", "$.tags[1]x"])
    def test_malformed_segment(self, path):
        with pytest.raises(PathError, match="malformed segment"):
            q(DOC, path)

    def test_lookup_into_scalar(self):
        with pytest.raises(PathError, match="not found"):
            q(DOC, "$.name.first")

    def test_too_deep(self):
        doc = {}
        cursor = doc
        for _ in range(60):
            cursor["a"] = {}
            cursor = cursor["a"]
        # 51 segments are allowed, the 52nd fails
        assert isinstance(q(doc, "$." + ".".join(["a"] * 51)), dict)
        with pytest.raises(PathError, match="too deep"):
            q(doc, "$." + ".".join(["a"] * 52))

    def test_error_message_locates_segment(self):
        with pytest.raises(PathError) as exc:
            q(DOC, "$.address.country")
        assert str(exc.value) == "path not found: 'country' (segment 1)"
