"""Tests for depanalyzer.graph.dependency_types."""

from __future__ import annotations

import pytest

from depanalyzer.errors import InvalidFQSENError, ShouldNotHappenError
from depanalyzer.graph.dependency_types import (
    DEPENDENCY_TYPE_NAMES,
    ConstantFetch,
    Generic,
    MethodCall,
    NewObject,
    PropertyFetch,
    dependency_type_from_dict,
    dependency_type_to_dict,
)

# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class TestVariants:
    def test_equality_by_variant_and_payload(self) -> None:
        assert MethodCall("save", "run") == MethodCall("save", "run")
        assert MethodCall("save", "run") != MethodCall("save")
        assert NewObject() != Generic()

    def test_property_accepts_dollar_prefix(self) -> None:
        assert PropertyFetch("$items").property_name == "$items"

    @pytest.mark.parametrize(
        ("factory", "message"),
        [
            pytest.param(lambda: MethodCall("not-a-name"), "method", id="callee"),
            pytest.param(lambda: MethodCall("save", "run()"), "caller", id="method-caller"),
            pytest.param(lambda: PropertyFetch("$"), "property", id="property"),
            pytest.param(lambda: ConstantFetch("1LIMIT"), "class constant", id="constant"),
            pytest.param(lambda: NewObject("new object"), "caller", id="new-caller"),
        ],
    )
    def test_member_names_must_be_identifiers(self, factory: object, message: str) -> None:
        with pytest.raises(InvalidFQSENError, match=message):
            factory()  # type: ignore[operator]


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class TestSerialization:
    def test_to_dict_uses_file_format_keys(self) -> None:
        assert dependency_type_to_dict(PropertyFetch(property_name="items")) == {
            "type": "property_fetch",
            "caller": None,
            "property": "items",
        }

    def test_to_dict_type_key_comes_from_registry(self) -> None:
        samples = [
            MethodCall("save"),
            PropertyFetch("items"),
            ConstantFetch("LIMIT"),
            NewObject(),
            Generic(),
        ]
        assert [dependency_type_to_dict(s)["type"] for s in samples] == list(
            DEPENDENCY_TYPE_NAMES.values()
        )

    def test_generic_has_no_payload(self) -> None:
        assert dependency_type_to_dict(Generic()) == {"type": "generic"}

    def test_to_dict_unknown_variant_is_internal_error(self) -> None:
        with pytest.raises(ShouldNotHappenError):
            dependency_type_to_dict("static_call")  # type: ignore[arg-type]

    def test_from_dict_reads_facts_record(self) -> None:
        record = {
            "depender": "\\A",
            "type": "constant_fetch",
            "constant": "LIMIT",
            "caller": "check",
        }
        assert dependency_type_from_dict(record) == ConstantFetch("LIMIT", caller="check")

    def test_missing_type_defaults_to_generic(self) -> None:
        assert dependency_type_from_dict({}) == Generic()

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown dependency type 'static_call'"):
            dependency_type_from_dict({"type": "static_call"})

    def test_method_call_requires_callee(self) -> None:
        with pytest.raises(ValueError, match="callee"):
            dependency_type_from_dict({"type": "method_call", "caller": "run"})

    def test_from_dict_rejects_invalid_member_name(self) -> None:
        with pytest.raises(ValueError, match="Invalid method name: 'not-a-name'"):
            dependency_type_from_dict({"type": "method_call", "callee": "not-a-name"})
