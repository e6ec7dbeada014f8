"""Rewrite stored image references into one consistent form.

Older upload paths wrote Windows-style paths (``uploads\\products\\a.png``)
straight into product rows. The resolver copes with them at read time; this
module fixes the rows so every writer and reader sees forward-slash server
paths. Only the stored strings change; files on disk are not moved or renamed.
"""

import logging
from typing import List
from typing import Optional

from pcrex.assets import ReferenceKind
from pcrex.assets import classify
from pcrex.assets.classifier import normalize_raw
from pcrex.database import Database

logger = logging.getLogger(__name__)


def normalize_reference(raw) -> Optional[str]:
    """Stored form of a single reference, or None when it is absent.

    Only backslash paths are rewritten. Absolute URLs, data URIs and bare
    names are kept exactly as written.
    """
    kind = classify(raw)
    if kind is ReferenceKind.EMPTY:
        return None
    value = normalize_raw(raw)
    if kind is ReferenceKind.WINDOWS_STYLE:
        value = value.replace("\\", "/")
        if not value.startswith("/"):
            value = f"/{value}"
    return value


def normalize_images(images) -> List[str]:
    if not isinstance(images, (list, tuple)):
        return []
    normalized = (normalize_reference(img) for img in images)
    return [img for img in normalized if img is not None]


def normalize_product_images(db: Database, dry_run: bool = False) -> int:
    """Normalize image columns of every product; returns the rows changed."""
    changed = 0
    for product in db.get_all_products():
        images = normalize_images(product["images"])
        image = normalize_reference(product["image"])
        if image is None and images:
            image = images[0]

        if image == product["image"] and images == product["images"]:
            continue

        changed += 1
        logger.info(f"Product {product['id']}: {product['image']!r} -> {image!r}, {len(images)} images")
        if not dry_run:
            db.update_product_images(product["id"], image, images)

    logger.info(f"{'Would update' if dry_run else 'Updated'} {changed} products")
    return changed
