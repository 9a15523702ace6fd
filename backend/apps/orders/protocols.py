from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol


class OrderRepositoryProtocol(Protocol):
    def fetch_orders(self) -> List[Dict[str, Any]]:
        ...

    def fetch_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        ...

    def create_order(self, body: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def delete_order(self, order_id: str) -> None:
        ...


class FeeRepositoryProtocol(Protocol):
    def fetch_delivery_fees(self) -> List[Dict[str, Any]]:
        ...

    def fetch_service_fee(self) -> Dict[str, Any]:
        ...
