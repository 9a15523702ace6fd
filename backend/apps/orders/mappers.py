from datetime import datetime
from typing import Any, Iterable, List, Mapping

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from apps.catalog.mappers import resolve_image_url
from apps.common.coerce import optional_str, parse_bool, parse_int
from apps.common.currency import parse_price
from .dtos import DeliveryFeeDTO, OrderDTO, OrderItemDTO


def _parse_created_at(value: Any) -> datetime:
    if isinstance(value, str):
        try:
            parsed = parse_datetime(value)
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed
    return timezone.now()


class OrderItemMapper:
    @staticmethod
    def from_raw(raw: Mapping[str, Any]) -> OrderItemDTO:
        product = raw.get("product") if isinstance(raw.get("product"), Mapping) else None
        package = raw.get("package") if isinstance(raw.get("package"), Mapping) else None
        return OrderItemDTO(
            id=str(raw.get("id") or ""),
            qty=parse_int(raw.get("qty"), 0),
            price_at_order=parse_price(raw.get("price_at_order")),
            product_id=optional_str(raw.get("product_id")),
            package_id=optional_str(raw.get("package_id")),
            product_name=optional_str(product.get("name")) if product else None,
            package_name=optional_str(package.get("name")) if package else None,
            image_url=resolve_image_url(product or package or {}),
        )


class OrderMapper:
    @staticmethod
    def from_raw(raw: Mapping[str, Any]) -> OrderDTO:
        items = raw.get("items") if isinstance(raw.get("items"), list) else []
        return OrderDTO(
            id=str(raw.get("id") or ""),
            created_at=_parse_created_at(raw.get("created_at")),
            status=str(raw.get("status") or "pending"),
            total_price=parse_price(raw.get("total_price")),
            payment_method=optional_str(raw.get("payment_method")),
            items=[OrderItemMapper.from_raw(i) for i in items if isinstance(i, Mapping)],
            order_data=dict(raw),
        )

    @staticmethod
    def many_from_raw(items: Iterable[Any]) -> List[OrderDTO]:
        return [OrderMapper.from_raw(i) for i in items if isinstance(i, Mapping)]


class DeliveryFeeMapper:
    @staticmethod
    def from_raw(raw: Mapping[str, Any]) -> DeliveryFeeDTO:
        return DeliveryFeeDTO(
            id=str(raw.get("id") or ""),
            location=str(raw.get("location") or ""),
            fee=parse_price(raw.get("fee")),
            is_active=bool(parse_bool(raw.get("is_active"))),
        )

    @staticmethod
    def many_from_raw(items: Iterable[Any]) -> List[DeliveryFeeDTO]:
        return [DeliveryFeeMapper.from_raw(i) for i in items if isinstance(i, Mapping)]
