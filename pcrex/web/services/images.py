"""Product image resolution for API responses."""

from pcrex.assets import ImageResolver
from pcrex.assets import ResolvedAsset


def asset_payload(asset: ResolvedAsset) -> dict:
    return {"url": asset.url, "kind": asset.kind.value, "source": asset.as_source()}


def resolve_product_images(product: dict, resolver: ImageResolver, metrics=None) -> dict:
    """Return a copy of `product` with every image reference resolved.

    `images` becomes the resolved gallery and `image` its first entry, so the
    client never has to resolve anything itself.
    """
    gallery = resolver.resolve_gallery(product.get("images"), product.get("image"))
    if metrics is not None:
        for asset in gallery:
            metrics.image_resolutions.add(1, {"kind": asset.kind.value})

    urls = [asset.url for asset in gallery]
    return {**product, "images": urls, "image": urls[0]}
