"""Product catalogue routes with resolved image URLs."""

import logging
from typing import List

from fastapi import APIRouter
from fastapi import HTTPException
from fastapi import Request

from pcrex.database import Database
from pcrex.settings import DB_URL
from pcrex.web.schemas import ProductIn
from pcrex.web.schemas import ProductOut
from pcrex.web.services.images import resolve_product_images

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


def _ensure_db(request: Request):
    if not hasattr(request.app.state, "db"):
        request.app.state.db = Database(db_url=DB_URL)
    return request.app.state.db


@router.get("", response_model=List[ProductOut])
async def list_products(request: Request):
    try:
        db = _ensure_db(request)
        products = db.get_all_products()
    except Exception as e:
        logger.error(f"Error fetching products: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error while fetching products")

    resolver = request.app.state.image_resolver
    metrics = request.app.state.metrics
    return [resolve_product_images(p, resolver, metrics) for p in products]


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: int, request: Request):
    try:
        db = _ensure_db(request)
        product = db.get_product(product_id)
    except Exception as e:
        logger.error(f"Error fetching product {product_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error while fetching product")

    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")

    return resolve_product_images(product, request.app.state.image_resolver, request.app.state.metrics)


@router.post("", response_model=ProductOut, status_code=201)
async def create_product(payload: ProductIn, request: Request):
    """Store a product; image references are kept as written, the first one becomes the main image."""
    try:
        db = _ensure_db(request)
        product_id = db.add_product(
            name=payload.name,
            price=payload.price,
            description=payload.description,
            category=payload.category,
            quantity=payload.quantity,
            images=payload.images,
        )
        product = db.get_product(product_id) if product_id is not None else None
    except Exception as e:
        logger.error(f"Error creating product: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error while creating product")

    if product_id is None:
        raise HTTPException(status_code=503, detail="Database is in read-only mode")
    if product is None:
        logger.error(f"Product {product_id} missing right after insert")
        raise HTTPException(status_code=500, detail="Server error while creating product")

    logger.info(f"Created product {product_id} with {len(payload.images)} images")
    return resolve_product_images(product, request.app.state.image_resolver, request.app.state.metrics)


@router.delete("/{product_id}")
async def delete_product(product_id: int, request: Request):
    try:
        db = _ensure_db(request)
        deleted = db.delete_product(product_id)
    except Exception as e:
        logger.error(f"Error deleting product {product_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Server error while deleting product")

    if deleted is None:
        raise HTTPException(status_code=503, detail="Database is in read-only mode")
    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")

    logger.info(f"Deleted product {product_id}")
    return {"message": "Product deleted", "id": product_id}
