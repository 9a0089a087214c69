"""Tests for the transform registry."""

import pytest

from ptools.transforms.registry import TransformRegistry, get_transform_registry
from ptools.transforms.schemas import TransformDefinition

EXPECTED_ORDER = [
    "regexp",
    "datetime",
    "base64d",
    "base64e",
    "urid",
    "urie",
    "jsonbtf",
    "jsonsmp",
    "jsonesc",
    "jsonunesc",
    "json2yaml",
    "yaml2json",
    "py2json",
    "json2py",
    "gzipc",
    "gzipd",
    "curl",
    "curl2iwr",
]


def test_catalog_in_registration_order():
    registry = TransformRegistry()
    assert registry.list_names() == EXPECTED_ORDER
    assert [t.name for t in registry.list_all()] == EXPECTED_ORDER
    assert registry.count() == len(EXPECTED_ORDER)


def test_list_is_stable_across_calls():
    registry = get_transform_registry()
    first = registry.list_all()
    second = registry.list_all()
    assert [id(t) for t in first] == [id(t) for t in second]


def test_get_unknown_returns_none():
    assert TransformRegistry().get("rot13") is None


def test_duplicate_names_rejected():
    registry = TransformRegistry([
        TransformDefinition(name="same", invoke=lambda t, o: t),
        TransformDefinition(name="same", invoke=lambda t, o: t),
    ])
    with pytest.raises(ValueError, match="Duplicate transform name"):
        registry.load()


def test_summaries_list_option_keys():
    summaries = {s.name: s for s in TransformRegistry().list_summaries()}
    assert summaries["jsonbtf"].option_keys == ["multiline", "tab"]
    assert summaries["base64e"].option_keys == []


def test_detail_has_position_and_schema():
    detail = TransformRegistry().get_detail("urie")
    assert detail.position == EXPECTED_ORDER.index("urie")
    assert [spec.key for spec in detail.option_schema] == ["cmp"]
    assert TransformRegistry().get_detail("nope") is None
