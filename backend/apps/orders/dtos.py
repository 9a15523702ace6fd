from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class OrderItemDTO:
    id: str
    qty: int
    price_at_order: float
    product_id: Optional[str] = None
    package_id: Optional[str] = None
    product_name: Optional[str] = None
    package_name: Optional[str] = None
    image_url: Optional[str] = None


@dataclass
class OrderDTO:
    id: str
    created_at: datetime
    status: str
    total_price: float
    payment_method: Optional[str] = None
    items: List[OrderItemDTO] = field(default_factory=list)
    order_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DeliveryFeeDTO:
    id: str
    location: str
    fee: float
    is_active: bool = True


@dataclass
class CheckoutSummaryDTO:
    subtotal: float
    service_fee: float
    location_fee: float
    total: float
    fee_location: Optional[str] = None
    item_count: int = 0


@dataclass
class PlacedOrderDTO:
    order: Optional[OrderDTO]
    payment_url: Optional[str] = None
    message: Optional[str] = None
