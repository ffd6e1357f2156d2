"""Provider gateway base class."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

import httpx

from quickgit.exceptions import ConfigurationError, NotFoundError
from quickgit.transport import HTTPTransport
from quickgit.types.credentials import PlatformCredentials
from quickgit.types.repos import RemoteRepository
from quickgit.types.request import Platform, Visibility


class ProviderGateway(ABC):
    """
    Uniform capability over a hosting provider.

    Each subclass declares its ``platform`` and ``DEFAULT_BASE_URL`` and
    normalizes the provider's responses into the shared error taxonomy:
    ``AuthenticationFailed``, ``NameConflict`` and ``ProviderError``.

    Example:
        ```python
        from quickgit.providers import ProviderGateway
        from quickgit.types import Platform, PlatformCredentials, Visibility

        creds = PlatformCredentials(username="octocat", token="...")
        with ProviderGateway.for_platform(Platform.GITHUB) as gateway:
            if not gateway.exists("demo", creds):
                repo = gateway.create_repository("demo", Visibility.PUBLIC, "", creds)
                print(repo.ssh_url)
        ```
    """

    platform: ClassVar[Platform]
    DEFAULT_BASE_URL: ClassVar[str]
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            base_url: API base URL (default: the provider's public API)
            timeout: Request timeout in seconds (default: 30.0)
            transport: Optional httpx transport, used by tests
        """
        self._transport = HTTPTransport(
            base_url=base_url or self.DEFAULT_BASE_URL,
            platform=self.platform.value,
            timeout=timeout,
            headers=self.default_headers(),
            transport=transport,
        )

    @classmethod
    def for_platform(cls, platform: Platform | str, **kwargs: Any) -> "ProviderGateway":
        """
        Create the gateway variant for a platform.

        Raises:
            ConfigurationError: If no variant serves the platform
        """
        # Deferred to avoid a circular import with the variant modules
        from quickgit.providers.gitee import GiteeGateway
        from quickgit.providers.github import GitHubGateway

        try:
            platform = Platform(platform)
        except ValueError:
            raise ConfigurationError(f"Unsupported platform: {platform}") from None

        for variant in (GitHubGateway, GiteeGateway):
            if variant.platform is platform:
                return variant(**kwargs)
        raise ConfigurationError(f"Unsupported platform: {platform.value}")

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport."""
        return self._transport

    def default_headers(self) -> dict[str, str]:
        return {}

    @abstractmethod
    def create_repository(
        self,
        name: str,
        visibility: Visibility,
        description: str,
        credentials: PlatformCredentials,
    ) -> RemoteRepository:
        """
        Create an empty remote repository (no README or license).

        Raises:
            AuthenticationFailed: If the credentials are rejected
            NameConflict: If the name already exists
            ProviderError: On any other failure
        """

    @abstractmethod
    def get_repository(self, name: str, credentials: PlatformCredentials) -> dict[str, Any]:
        """
        Fetch the raw repository record owned by ``credentials.username``.

        Raises:
            NotFoundError: If the repository does not exist
        """

    def exists(self, name: str, credentials: PlatformCredentials) -> bool:
        """
        Check whether the user already owns a repository with this name.

        A provider "not found" answer is a normal ``False``.

        Raises:
            AuthenticationFailed: If the credentials are rejected
            ProviderError: On any other failure
        """
        try:
            self.get_repository(name, credentials)
        except NotFoundError:
            return False
        return True

    def close(self) -> None:
        """Close the gateway and release resources."""
        self._transport.close()

    def __enter__(self) -> "ProviderGateway":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
