from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CategoryDTO:
    id: str
    name: str
    name_ar: Optional[str] = None


@dataclass
class ProductDTO:
    id: str
    name: str
    price: float
    description: Optional[str] = None
    image_url: Optional[str] = None
    image_urls: List[str] = field(default_factory=list)
    stock: Optional[int] = None
    category: Optional[CategoryDTO] = None
    name_ar: Optional[str] = None
    description_ar: Optional[str] = None


@dataclass
class PackageDTO:
    id: str
    name: str
    price: float
    description: Optional[str] = None
    image_url: Optional[str] = None
    products_count: int = 0


@dataclass
class CommentDTO:
    id: str
    comment: str
    created_at: str
    rating: int = 5
    user_id: Optional[str] = None
    user_name: Optional[str] = None


@dataclass
class UserRatingDTO:
    user_id: str
    rating: int


@dataclass
class RatingDTO:
    average_rating: float = 0.0
    total_ratings: int = 0
    user_rating: Optional[UserRatingDTO] = None
