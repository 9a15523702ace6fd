import pytest

from apps.remote.shapes import (
    extract_collection,
    extract_list,
    mappings_only,
    normalize_mutation_response,
    unwrap_data,
)


@pytest.mark.parametrize(
    "response, expected",
    [
        ([{"id": 1}], [{"id": 1}]),
        ({"items": [{"id": 1}]}, [{"id": 1}]),
        ({"data": {"items": [{"id": 2}]}}, [{"id": 2}]),
        ({"data": {"products": [{"id": 3}], "packages": [{"id": 4}]}}, [{"id": 3}, {"id": 4}]),
        ({"message": "empty"}, []),
        ("nonsense", []),
    ],
)
def test_extract_collection_shapes(response, expected):
    assert extract_collection(response) == expected


def test_merge_root_reads_top_level_products_and_packages():
    response = {"products": [{"id": 1}], "packages": [{"id": 2}]}
    assert extract_collection(response) == []
    assert extract_collection(response, merge_root=True) == [{"id": 1}, {"id": 2}]


def test_extract_list_and_mappings_only():
    assert extract_list({"data": [1, {"id": 2}]}) == [1, {"id": 2}]
    assert extract_list({"data": {"id": 2}}) is None
    assert mappings_only([1, {"id": 2}, "x"]) == [{"id": 2}]
    assert mappings_only(None) == []


def test_unwrap_data_only_unwraps_mappings():
    assert unwrap_data({"data": {"id": 1}}) == {"id": 1}
    assert unwrap_data({"data": [1]}) == {"data": [1]}


def test_normalize_mutation_response():
    assert normalize_mutation_response({"items": [1]}, ("items",)) == {"items": [1]}
    assert normalize_mutation_response([{"id": 1}], ("items",)) == {"items": [{"id": 1}]}
    assert normalize_mutation_response(None, ("items",)) == {"success": True}
