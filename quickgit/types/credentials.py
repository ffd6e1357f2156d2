"""Credential and configuration data models."""

from dataclasses import dataclass, field

from quickgit.types.request import Platform, Visibility

DEFAULT_BRANCH = "master"


@dataclass(frozen=True)
class PlatformCredentials:
    """Username and access token for one platform."""

    username: str = ""
    token: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.username) and bool(self.token)


@dataclass
class QuickGitConfig:
    """Persisted user configuration."""

    platforms: dict[Platform, PlatformCredentials] = field(
        default_factory=lambda: {p: PlatformCredentials() for p in Platform}
    )
    default_branch: str = DEFAULT_BRANCH
    default_visibility: Visibility = Visibility.PUBLIC

    def credentials_for(self, platform: Platform) -> PlatformCredentials:
        return self.platforms.get(platform, PlatformCredentials())
