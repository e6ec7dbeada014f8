"""Tests for stored image path normalization."""

import pytest

from pcrex.image_paths import normalize_images
from pcrex.image_paths import normalize_product_images
from pcrex.image_paths import normalize_reference


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, None),
        ("   ", None),
        (12, None),
        ("uploads\\products\\pc.png", "/uploads/products/pc.png"),
        ("\\uploads\\pc.png", "/uploads/pc.png"),
        ("/uploads/products/pc.png", "/uploads/products/pc.png"),
        ("pc.png", "pc.png"),
        ("https://cdn.example.com/a\\b.png", "https://cdn.example.com/a\\b.png"),
        ("data:image/png;base64,AAAA", "data:image/png;base64,AAAA"),
        (" pc.png ", "pc.png"),
    ],
)
def test_normalize_reference(raw, expected):
    assert normalize_reference(raw) == expected


def test_normalize_images_drops_absent_entries():
    assert normalize_images(["a\\b.png", None, "", "/c.png"]) == ["/a/b.png", "/c.png"]
    assert normalize_images(None) == []
    assert normalize_images("a.png") == []


def test_normalize_product_images_updates_changed_rows(mock_database):
    changed = normalize_product_images(mock_database)

    # Only the prebuilt PC has a backslash path
    assert changed == 1
    mock_database.update_product_images.assert_called_once_with(2, "/uploads/products/pc.png", [])


def test_normalize_product_images_dry_run(mock_database):
    changed = normalize_product_images(mock_database, dry_run=True)

    assert changed == 1
    mock_database.update_product_images.assert_not_called()


def test_normalize_product_images_sets_main_image_from_list(mock_database, sample_products):
    sample_products[2]["images"] = ["products\\paste.png"]

    normalize_product_images(mock_database)

    mock_database.update_product_images.assert_any_call(3, "/products/paste.png", ["/products/paste.png"])


def test_normalize_product_images_is_idempotent(mock_database, sample_products):
    def apply(product_id, image, images):
        product = next(p for p in sample_products if p["id"] == product_id)
        product["image"] = image
        product["images"] = images
        return True

    mock_database.update_product_images.side_effect = apply

    assert normalize_product_images(mock_database) == 1
    assert normalize_product_images(mock_database) == 0
