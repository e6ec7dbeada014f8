"""Environment registry: the base locations image references resolve against."""

from dataclasses import dataclass
from dataclasses import field
from typing import Optional
from urllib.parse import urlsplit

from pcrex.settings import ConfigError

TARGET_LOCAL = "local"
TARGET_DEPLOYED = "deployed"
VALID_TARGETS = (TARGET_LOCAL, TARGET_DEPLOYED)

# Bare filenames live under this segment of the active host
UPLOADS_SEGMENT = "uploads"

DEFAULT_PLACEHOLDER_URL = "https://placehold.co/150x150?text=No+Image"


def _is_http_url(value: str) -> bool:
    """True for an http(s) URL that names a host; `http://` alone does not."""
    if not value.lower().startswith(("http://", "https://")):
        return False
    return bool(urlsplit(value).netloc)


@dataclass(frozen=True)
class EnvironmentConfig:
    """Immutable per-process image hosting configuration.

    Hosts are stored without a trailing slash. The cloud prefix is kept as
    given; joins against it always produce a single separator.
    """

    local_host: str
    deployed_host: str
    cloud_prefix: Optional[str] = None
    placeholder_url: str = DEFAULT_PLACEHOLDER_URL
    target: str = field(default=TARGET_DEPLOYED)

    def __post_init__(self):
        for name in ("local_host", "deployed_host"):
            value = getattr(self, name)
            if not isinstance(value, str) or not _is_http_url(value.strip()):
                raise ConfigError(f"{name} must be an absolute http(s) URL, got {value!r}")
            object.__setattr__(self, name, value.strip().rstrip("/"))

        if self.cloud_prefix is not None:
            prefix = self.cloud_prefix.strip()
            if not prefix:
                object.__setattr__(self, "cloud_prefix", None)
            elif not _is_http_url(prefix):
                raise ConfigError(f"cloud_prefix must be an absolute http(s) URL, got {self.cloud_prefix!r}")
            else:
                object.__setattr__(self, "cloud_prefix", prefix)

        if not isinstance(self.placeholder_url, str) or not self.placeholder_url.strip():
            raise ConfigError("placeholder_url must be a non-empty string")
        object.__setattr__(self, "placeholder_url", self.placeholder_url.strip())

        if self.target not in VALID_TARGETS:
            raise ConfigError(f"target must be one of {VALID_TARGETS}, got {self.target!r}")

    def active_host(self) -> str:
        """Host for server paths under the current runtime target."""
        if self.target == TARGET_LOCAL:
            return self.local_host
        return self.deployed_host

    @property
    def uses_cloud_storage(self) -> bool:
        return self.cloud_prefix is not None


def load_environment_config(target: Optional[str] = None) -> EnvironmentConfig:
    """Build the registry from process settings.

    `target` overrides ASSET_TARGET, mainly for tools that inspect the other
    environment.
    """
    from pcrex import settings

    return EnvironmentConfig(
        local_host=settings.LOCAL_HOST,
        deployed_host=settings.DEPLOYED_HOST,
        cloud_prefix=settings.CLOUD_PREFIX,
        placeholder_url=settings.PLACEHOLDER_URL,
        target=target or settings.ASSET_TARGET,
    )
