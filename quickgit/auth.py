"""
Credential acquisition and the authentication retry policy.

``AuthRetryPolicy`` wraps provider gateway calls: when the provider rejects
the credentials, the stored credentials for that platform are cleared, fresh
ones are acquired and the call is retried exactly once.
"""

from collections.abc import Callable
from typing import Protocol, TypeVar

from quickgit.config import ConfigStoreProtocol
from quickgit.exceptions import AuthenticationFailed
from quickgit.logging import get_logger
from quickgit.prompts import Prompter
from quickgit.types.credentials import PlatformCredentials
from quickgit.types.request import Platform, validate_name

logger = get_logger("auth")

T = TypeVar("T")


class Authenticator(Protocol):
    """Acquires usable credentials for a platform."""

    def ensure(self, platform: Platform) -> PlatformCredentials: ...


class PromptAuthenticator:
    """Returns stored credentials, asking the user for missing ones."""

    def __init__(self, store: ConfigStoreProtocol, prompter: Prompter) -> None:
        self.store = store
        self.prompter = prompter

    def ensure(self, platform: Platform) -> PlatformCredentials:
        """
        Get complete credentials for ``platform``.

        Prompts for a username and an access token when the stored ones are
        incomplete, and saves the answers.
        """
        platform = Platform(platform)
        config = self.store.load()
        credentials = config.credentials_for(platform)
        if credentials.is_complete:
            return credentials

        name = platform.display_name
        username = self.prompter.text(
            f"{name} username",
            default=credentials.username or None,
            validate=lambda value: validate_name(value, "Username"),
        )
        token = ""
        while not token:
            token = self.prompter.secret(f"{name} personal access token")

        credentials = PlatformCredentials(username=username, token=token)
        config.platforms[platform] = credentials
        self.store.save(config)
        logger.info(f"Saved {name} credentials for {username}")
        return credentials


class AuthRetryPolicy:
    """
    Runs provider operations with one re-authentication retry.

    Example:
        ```python
        policy = AuthRetryPolicy(store, authenticator)
        repo = policy.run(
            Platform.GITHUB,
            lambda creds: gateway.create_repository("demo", Visibility.PUBLIC, "", creds),
        )
        ```
    """

    def __init__(self, store: ConfigStoreProtocol, authenticator: Authenticator) -> None:
        """
        Initialize the policy.

        Args:
            store: Configuration store whose credentials get cleared on rejection
            authenticator: Source of fresh credentials
        """
        self.store = store
        self.authenticator = authenticator
        self._credentials: dict[Platform, PlatformCredentials] = {}

    def credentials(self, platform: Platform) -> PlatformCredentials:
        """Current credentials for ``platform``, acquiring them if needed."""
        platform = Platform(platform)
        if platform not in self._credentials:
            self._credentials[platform] = self.authenticator.ensure(platform)
        return self._credentials[platform]

    def run(self, platform: Platform, operation: Callable[[PlatformCredentials], T]) -> T:
        """
        Execute ``operation`` with the platform credentials.

        Raises:
            AuthenticationFailed: If the fresh credentials are rejected too
            QuickGitError: Any non-authentication failure, without retry
        """
        platform = Platform(platform)
        try:
            return operation(self.credentials(platform))
        except AuthenticationFailed as first:
            logger.warning(
                f"{platform.display_name} rejected the credentials ({first.message}), "
                "re-authenticating"
            )

        self._credentials.pop(platform, None)
        self.store.clear_credentials(platform)
        fresh = self.credentials(platform)

        try:
            return operation(fresh)
        except AuthenticationFailed as second:
            raise AuthenticationFailed(
                "AUTHENTICATION_FAILED_AFTER_RETRY",
                f"{platform.display_name} rejected the credentials again: {second.message}",
            ) from second
