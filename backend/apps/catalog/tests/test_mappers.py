import unittest

from apps.catalog.mappers import (
    CommentMapper,
    PackageMapper,
    ProductMapper,
    RatingMapper,
    resolve_image_url,
)


class ImageResolutionTests(unittest.TestCase):
    def test_prefers_image_url(self):
        raw = {"image_url": "a.png", "image_urls": ["b.png"], "image": "c.png"}
        self.assertEqual(resolve_image_url(raw), "a.png")

    def test_falls_back_through_image_urls_images_and_image(self):
        self.assertEqual(resolve_image_url({"image_urls": ["b.png"], "image": "c.png"}), "b.png")
        self.assertEqual(resolve_image_url({"images": [{"url": "d.png"}]}), "d.png")
        self.assertEqual(resolve_image_url({"images": ["e.png"]}), "e.png")
        self.assertEqual(resolve_image_url({"image": "c.png"}), "c.png")
        self.assertIsNone(resolve_image_url({}))


class ProductMapperTests(unittest.TestCase):
    def test_from_raw_coerces_loose_fields(self):
        dto = ProductMapper.from_raw(
            {
                "id": 7,
                "name": "Notebook",
                "name_ar": "دفتر",
                "price": "3.50",
                "stock": "12",
                "images": [{"url": "n1.png"}, {"url": "n2.png"}],
                "category": {"id": 2, "name": "Paper"},
            }
        )
        self.assertEqual(dto.id, "7")
        self.assertEqual(dto.price, 3.5)
        self.assertEqual(dto.stock, 12)
        self.assertEqual(dto.image_url, "n1.png")
        self.assertEqual(dto.image_urls, ["n1.png", "n2.png"])
        self.assertEqual(dto.category.id, "2")
        self.assertEqual(dto.name_ar, "دفتر")

    def test_unparsable_price_becomes_zero(self):
        self.assertEqual(ProductMapper.from_raw({"id": 1, "price": "n/a"}).price, 0.0)

    def test_many_from_raw_skips_non_mappings(self):
        items = ProductMapper.many_from_raw([{"id": 1, "name": "Pen"}, "junk", None])
        self.assertEqual([p.id for p in items], ["1"])

    def test_placeholder(self):
        dto = ProductMapper.placeholder("9")
        self.assertEqual(dto.name, "Product 9")
        self.assertEqual(dto.price, 0.0)


class OtherMapperTests(unittest.TestCase):
    def test_package_products_count_defaults_to_zero(self):
        dto = PackageMapper.from_raw({"id": 3, "name": "Back to school", "price": 20})
        self.assertEqual(dto.products_count, 0)
        self.assertEqual(dto.price, 20.0)

    def test_comment_reads_nested_user(self):
        dto = CommentMapper.from_raw(
            {"id": 1, "comment": "Great", "user": {"id": 4, "name": "Sara"}}
        )
        self.assertEqual(dto.user_id, "4")
        self.assertEqual(dto.user_name, "Sara")
        self.assertEqual(dto.rating, 5)

    def test_rating_defaults_and_user_rating(self):
        empty = RatingMapper.from_raw({})
        self.assertEqual(empty.average_rating, 0.0)
        self.assertEqual(empty.total_ratings, 0)
        self.assertIsNone(empty.user_rating)

        rated = RatingMapper.from_raw(
            {"average_rating": "4.5", "total_ratings": 2, "user_rating": {"user_id": 1, "rating": 4}}
        )
        self.assertEqual(rated.average_rating, 4.5)
        self.assertEqual(rated.user_rating.rating, 4)
