from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class PlaceOrderCommand:
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_location: str
    payment_method: str
    fee_location: Optional[str] = None
    card_details: Optional[Dict[str, str]] = None

    @staticmethod
    def from_raw(payload: Dict[str, Any]) -> "PlaceOrderCommand":
        if not isinstance(payload, dict):
            raise ValueError("Payload must be a dict")
        card = payload.get("card_details")
        return PlaceOrderCommand(
            customer_name=str(payload.get("customer_name", "")).strip(),
            customer_email=str(payload.get("customer_email", "")).strip(),
            customer_phone=str(payload.get("customer_phone", "")).strip(),
            delivery_location=str(payload.get("delivery_location", "")).strip(),
            payment_method=str(payload.get("payment_method", "")).strip(),
            fee_location=payload.get("fee_location") or None,
            card_details={str(k): str(v) for k, v in card.items()} if isinstance(card, dict) else None,
        )

    def to_body(self, items) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "delivery_location": self.delivery_location,
        }
        if self.fee_location is not None:
            body["fee_location"] = self.fee_location
        body["payment_method"] = self.payment_method
        body["items"] = list(items)
        if self.card_details is not None:
            body["card_details"] = self.card_details
        return body
