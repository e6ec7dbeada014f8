"""Tests for the product database facade against a throwaway SQLite file."""

import pytest

from pcrex.database import Database


@pytest.fixture
def db(tmp_path):
    database = Database(db_url=f"sqlite:///{tmp_path / 'shop.db'}")
    yield database
    database.close()


def test_add_and_fetch_product(db):
    product_id = db.add_product(
        name="Gaming Mouse",
        price=1499.0,
        category="Peripherals",
        quantity=5,
        images=["/uploads/products/mouse.png", "mouse-side.png"],
    )

    product = db.get_product(product_id)
    assert product["name"] == "Gaming Mouse"
    assert product["image"] == "/uploads/products/mouse.png"
    assert product["images"] == ["/uploads/products/mouse.png", "mouse-side.png"]
    assert product["quantity"] == 5


def test_product_without_images(db):
    product_id = db.add_product(name="Thermal Paste", price=250.0)

    product = db.get_product(product_id)
    assert product["image"] is None
    assert product["images"] == []


def test_get_missing_product(db):
    assert db.get_product(999) is None


def test_get_all_products_in_id_order(db):
    first = db.add_product(name="A", price=1.0)
    second = db.add_product(name="B", price=2.0)

    assert [p["id"] for p in db.get_all_products()] == [first, second]


def test_update_product_images(db):
    product_id = db.add_product(name="Prebuilt PC", price=78999.0, images=["uploads\\pc.png"])

    assert db.update_product_images(product_id, "/uploads/pc.png", ["/uploads/pc.png"]) is True
    product = db.get_product(product_id)
    assert product["image"] == "/uploads/pc.png"
    assert product["images"] == ["/uploads/pc.png"]


def test_update_missing_product(db):
    assert db.update_product_images(999, None, []) is False


def test_read_only_mode_blocks_writes(db):
    db.read_only_mode = True

    assert db.add_product(name="Blocked", price=1.0) is None
    assert db.get_all_products() == []


def test_ping(db):
    db.ping()


def test_delete_product(db):
    product_id = db.add_product(name="Old Stock", price=10.0, images=["/uploads/products/old.png"])

    assert db.delete_product(product_id) is True
    assert db.get_product(product_id) is None
    assert db.delete_product(product_id) is False


def test_read_only_mode_blocks_delete(db):
    product_id = db.add_product(name="Keep Me", price=10.0)
    db.read_only_mode = True

    assert db.delete_product(product_id) is None
    assert db.get_product(product_id)["name"] == "Keep Me"
