"""Resolve raw image references into URLs the mobile client can render."""

from dataclasses import dataclass
from typing import Iterable
from typing import List

from pcrex.assets.classifier import ReferenceKind
from pcrex.assets.classifier import classify
from pcrex.assets.classifier import normalize_raw
from pcrex.assets.placeholder import PlaceholderPolicy
from pcrex.assets.registry import UPLOADS_SEGMENT
from pcrex.assets.registry import EnvironmentConfig


@dataclass(frozen=True)
class ResolvedAsset:
    url: str
    kind: ReferenceKind

    def as_source(self) -> dict:
        """Image source object in the shape React Native's <Image> expects."""
        return {"uri": self.url}

    def as_dict(self) -> dict:
        return {"url": self.url, "kind": self.kind.value}


def _join(base: str, path: str) -> str:
    """Join with exactly one slash between base and path."""
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def resolve(raw, config: EnvironmentConfig) -> ResolvedAsset:
    """Convert a stored image reference to a canonical URL.

    Absolute URLs and data URIs pass through untouched, so resolving an
    already-resolved URL returns it as-is. Never raises: anything that is not
    recognised is treated as a bare name.
    """
    policy = PlaceholderPolicy(config)
    kind = classify(raw)
    if kind is ReferenceKind.EMPTY:
        return ResolvedAsset(policy.placeholder_url(), ReferenceKind.PLACEHOLDER)

    value = normalize_raw(raw)
    if policy.is_placeholder(value):
        return ResolvedAsset(policy.placeholder_url(), ReferenceKind.PLACEHOLDER)

    if kind in (ReferenceKind.ABSOLUTE, ReferenceKind.EMBEDDED):
        return ResolvedAsset(value, kind)

    if kind is ReferenceKind.SERVER_RELATIVE:
        return ResolvedAsset(_join(config.active_host(), value), kind)

    if kind is ReferenceKind.WINDOWS_STYLE:
        path = value.replace("\\", "/")
        if not path.startswith("/"):
            path = f"/{path}"
        return ResolvedAsset(_join(config.active_host(), path), kind)

    if config.uses_cloud_storage:
        return ResolvedAsset(_join(config.cloud_prefix, value), ReferenceKind.BARE_NAME)
    uploads_base = _join(config.active_host(), UPLOADS_SEGMENT)
    return ResolvedAsset(_join(uploads_base, value), ReferenceKind.BARE_NAME)


class ImageResolver:
    """Resolver bound to one EnvironmentConfig.

    Holds no mutable state, so a single instance can be shared by every
    request handler.
    """

    def __init__(self, config: EnvironmentConfig):
        self.config = config

    def resolve(self, raw) -> ResolvedAsset:
        return resolve(raw, self.config)

    def resolve_url(self, raw) -> str:
        return resolve(raw, self.config).url

    def resolve_many(self, values: Iterable) -> List[ResolvedAsset]:
        return [resolve(value, self.config) for value in values]

    def resolve_gallery(self, images, main_image=None) -> List[ResolvedAsset]:
        """Resolve a product's image list, falling back to its main image.

        Always returns at least one entry; the placeholder when the product
        has nothing usable.
        """
        if isinstance(images, (list, tuple)) and images:
            return self.resolve_many(images)
        return [self.resolve(main_image)]
