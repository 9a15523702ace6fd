"""Build the payloads posted to the backend's sync-guest endpoints."""
from typing import Any, Dict, Iterable, List, Optional, Tuple

Key = Tuple[str, str]


def _key(item) -> Optional[Key]:
    if item.product_id:
        return ("product", str(item.product_id))
    if item.package_id:
        return ("package", str(item.package_id))
    return None


def merge_cart_items(local: Iterable[Any], remote: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Union of two carts keyed by product or package id.

    When both sides hold the same target the larger quantity is kept, so a
    retried sync never doubles quantities.
    """
    merged: Dict[Key, Dict[str, Any]] = {}
    for item in list(local) + list(remote):
        key = _key(item)
        if key is None:
            continue
        quantity = max(int(item.quantity or 1), 1)
        current = merged.get(key)
        if current is not None and current["quantity"] >= quantity:
            continue
        merged[key] = {
            "product_id": item.product_id,
            "package_id": item.package_id,
            "quantity": quantity,
        }
    return list(merged.values())


def merge_wishlist_items(local: Iterable[Any], remote: Iterable[Any]) -> List[Dict[str, Any]]:
    merged: Dict[Key, Dict[str, Any]] = {}
    for item in list(local) + list(remote):
        key = _key(item)
        if key is None or key in merged:
            continue
        merged[key] = {"product_id": item.product_id, "package_id": item.package_id}
    return list(merged.values())
