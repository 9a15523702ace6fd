from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from apps.common.repository import RemoteRepository
from apps.remote.exceptions import RemoteAPIError
from apps.remote.shapes import extract_list, mappings_only, unwrap_data


class RemoteOrderRepository(RemoteRepository):
    resource = "orders"

    def fetch_orders(self) -> List[Dict[str, Any]]:
        try:
            response = self.get()
        except RemoteAPIError as exc:
            self.logger.warning("Fetching orders failed", error=str(exc), status=exc.status_code)
            return []
        return mappings_only(extract_list(response))

    def fetch_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        try:
            response = unwrap_data(self.get(order_id))
        except RemoteAPIError as exc:
            self.logger.info("Fetching order failed", order_id=order_id, status=exc.status_code)
            return None
        return dict(response) if isinstance(response, Mapping) else None

    def create_order(self, body: Dict[str, Any]) -> Dict[str, Any]:
        self.logger.info(
            "Creating order",
            payment_method=body.get("payment_method"),
            items=len(body.get("items") or []),
        )
        response = self.post(body=body)
        if isinstance(response, Mapping) and "data" in response:
            data = response["data"]
            # keep top-level extras such as payment_url and message
            if isinstance(data, Mapping):
                extras = {k: v for k, v in response.items() if k != "data"}
                return {**extras, **data}
        return dict(response) if isinstance(response, Mapping) else {}

    def delete_order(self, order_id: str) -> None:
        self.delete(order_id)


class RemoteFeeRepository(RemoteRepository):
    def fetch_delivery_fees(self) -> List[Dict[str, Any]]:
        try:
            response = self.client.get_json("/delivery-fees")
        except RemoteAPIError as exc:
            self.logger.warning("Fetching delivery fees failed", error=str(exc))
            return []
        return mappings_only(response) if isinstance(response, list) else []

    def fetch_service_fee(self) -> Dict[str, Any]:
        try:
            response = self.client.get_json("/service-fee")
        except RemoteAPIError as exc:
            self.logger.warning("Fetching service fee failed", error=str(exc))
            return {}
        return dict(response) if isinstance(response, Mapping) else {}
