"""Helpers that flatten the response shapes the store backend is known to return."""
from typing import Any, Dict, List, Mapping, Optional, Sequence


def _first_present(data: Mapping, keys: Sequence[str]) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _merge_products_and_packages(data: Mapping) -> List[Any]:
    merged: List[Any] = []
    products = data.get("products")
    packages = data.get("packages")
    if isinstance(products, list):
        merged.extend(products)
    if isinstance(packages, list):
        merged.extend(packages)
    return merged


def extract_collection(
    response: Any,
    *,
    top_keys: Sequence[str] = ("items", "data"),
    nested_keys: Sequence[str] = ("items", "data"),
    merge_root: bool = False,
) -> List[Any]:
    """
    Return the list of line items hidden somewhere in ``response``.

    Handles a bare list, ``{top_key: [...]}``, ``{top_key: {nested_key: [...]}}``
    and ``{top_key: {products: [...], packages: [...]}}``. With ``merge_root``
    a response without any top key falls back to root-level products/packages.
    """
    if isinstance(response, list):
        return response
    if not isinstance(response, Mapping):
        return []
    data = _first_present(response, top_keys)
    if isinstance(data, Mapping):
        items = _first_present(data, nested_keys)
        data = items if isinstance(items, list) else _merge_products_and_packages(data)
    elif data is None and merge_root:
        data = _merge_products_and_packages(response)
    return data if isinstance(data, list) else []


def extract_list(response: Any, key: str = "data") -> Optional[List[Any]]:
    """Return ``response`` when it is a list, ``response[key]`` when that is one, else None."""
    if isinstance(response, list):
        return response
    if isinstance(response, Mapping) and isinstance(response.get(key), list):
        return response[key]
    return None


def mappings_only(items: Optional[Sequence[Any]]) -> List[Dict[str, Any]]:
    return [dict(item) for item in items or [] if isinstance(item, Mapping)]


def unwrap_data(response: Any) -> Any:
    """Unwrap Laravel resources of the form ``{"data": {...}}``."""
    if isinstance(response, Mapping) and isinstance(response.get("data"), Mapping):
        return dict(response["data"])
    return response


def normalize_mutation_response(response: Any, keys: Sequence[str]) -> Dict[str, Any]:
    if isinstance(response, Mapping) and any(response.get(k) is not None for k in keys):
        return dict(response)
    if isinstance(response, list):
        return {"items": response}
    if isinstance(response, Mapping):
        return dict(response)
    return {"success": True}
