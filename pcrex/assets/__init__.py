"""Image reference resolution shared by the API and the operator tools."""

from pcrex.assets.classifier import ReferenceKind
from pcrex.assets.classifier import classify
from pcrex.assets.placeholder import PlaceholderPolicy
from pcrex.assets.registry import EnvironmentConfig
from pcrex.assets.registry import load_environment_config
from pcrex.assets.resolver import ImageResolver
from pcrex.assets.resolver import ResolvedAsset
from pcrex.assets.resolver import resolve

__all__ = [
    "EnvironmentConfig",
    "ImageResolver",
    "PlaceholderPolicy",
    "ReferenceKind",
    "ResolvedAsset",
    "classify",
    "load_environment_config",
    "resolve",
]
