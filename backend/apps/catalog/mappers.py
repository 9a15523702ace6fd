"""Mapping from raw store-backend JSON to catalog DTOs."""
from typing import Any, Iterable, List, Mapping, Optional

from apps.common.coerce import optional_str, parse_int
from apps.common.currency import parse_price

from .dtos import (
    CategoryDTO,
    CommentDTO,
    PackageDTO,
    ProductDTO,
    RatingDTO,
    UserRatingDTO,
)


def _first_image(images: Any) -> Optional[str]:
    if not isinstance(images, list) or not images:
        return None
    first = images[0]
    if isinstance(first, Mapping):
        return optional_str(first.get("url"))
    return optional_str(first)


def resolve_image_url(raw: Mapping[str, Any]) -> Optional[str]:
    """image_url, then image_urls[0], then images[0] (string or {url}), then image."""
    image_url = optional_str(raw.get("image_url"))
    if image_url:
        return image_url
    return (
        _first_image(raw.get("image_urls"))
        or _first_image(raw.get("images"))
        or optional_str(raw.get("image"))
    )


def _image_list(raw: Mapping[str, Any]) -> List[str]:
    for key in ("images", "image_urls"):
        images = raw.get(key)
        if isinstance(images, list):
            urls = []
            for image in images:
                url = image.get("url") if isinstance(image, Mapping) else image
                if url:
                    urls.append(str(url))
            return urls
    return []


class CategoryMapper:
    @staticmethod
    def from_raw(raw: Mapping[str, Any]) -> CategoryDTO:
        return CategoryDTO(
            id=str(raw.get("id") or ""),
            name=str(raw.get("name") or ""),
            name_ar=optional_str(raw.get("name_ar")),
        )

    @staticmethod
    def many_from_raw(items: Iterable[Any]) -> List[CategoryDTO]:
        return [CategoryMapper.from_raw(i) for i in items if isinstance(i, Mapping)]


class ProductMapper:
    @staticmethod
    def from_raw(raw: Mapping[str, Any]) -> ProductDTO:
        category = raw.get("category")
        return ProductDTO(
            id=str(raw.get("id") or ""),
            name=str(raw.get("name") or ""),
            name_ar=optional_str(raw.get("name_ar")),
            description=optional_str(raw.get("description")),
            description_ar=optional_str(raw.get("description_ar")),
            price=parse_price(raw.get("price")),
            stock=parse_int(raw.get("stock")),
            image_url=resolve_image_url(raw),
            image_urls=_image_list(raw),
            category=CategoryMapper.from_raw(category) if isinstance(category, Mapping) else None,
        )

    @staticmethod
    def placeholder(product_id: str) -> ProductDTO:
        return ProductDTO(id=product_id, name=f"Product {product_id}", price=0.0)

    @staticmethod
    def many_from_raw(items: Iterable[Any]) -> List[ProductDTO]:
        return [ProductMapper.from_raw(i) for i in items if isinstance(i, Mapping)]


class PackageMapper:
    @staticmethod
    def from_raw(raw: Mapping[str, Any]) -> PackageDTO:
        return PackageDTO(
            id=str(raw.get("id") or ""),
            name=str(raw.get("name") or ""),
            description=optional_str(raw.get("description")),
            price=parse_price(raw.get("price")),
            image_url=resolve_image_url(raw),
            products_count=parse_int(raw.get("products_count"), 0),
        )

    @staticmethod
    def placeholder(package_id: str) -> PackageDTO:
        return PackageDTO(id=package_id, name=f"Package {package_id}", price=0.0)

    @staticmethod
    def many_from_raw(items: Iterable[Any]) -> List[PackageDTO]:
        return [PackageMapper.from_raw(i) for i in items if isinstance(i, Mapping)]


class CommentMapper:
    @staticmethod
    def from_raw(raw: Mapping[str, Any]) -> CommentDTO:
        user = raw.get("user") if isinstance(raw.get("user"), Mapping) else {}
        user_id = raw.get("user_id", user.get("id"))
        return CommentDTO(
            id=str(raw.get("id") or ""),
            comment=str(raw.get("comment") or ""),
            created_at=str(raw.get("created_at") or ""),
            rating=parse_int(raw.get("rating"), 5),
            user_id=optional_str(user_id),
            user_name=optional_str(user.get("name")),
        )

    @staticmethod
    def many_from_raw(items: Iterable[Any]) -> List[CommentDTO]:
        return [CommentMapper.from_raw(i) for i in items if isinstance(i, Mapping)]


class RatingMapper:
    @staticmethod
    def from_raw(raw: Mapping[str, Any]) -> RatingDTO:
        user_rating = raw.get("user_rating")
        parsed_user_rating = None
        if isinstance(user_rating, Mapping):
            parsed_user_rating = UserRatingDTO(
                user_id=str(user_rating.get("user_id") or ""),
                rating=parse_int(user_rating.get("rating"), 0),
            )
        elif user_rating is not None and parse_int(user_rating) is not None:
            parsed_user_rating = UserRatingDTO(user_id="", rating=parse_int(user_rating))
        return RatingDTO(
            average_rating=parse_price(raw.get("average_rating")),
            total_ratings=parse_int(raw.get("total_ratings"), 0),
            user_rating=parsed_user_rating,
        )
