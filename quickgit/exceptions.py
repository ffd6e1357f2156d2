"""quickgit exception classes."""


class QuickGitError(Exception):
    """Base exception for all quickgit errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(QuickGitError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class ValidationError(QuickGitError):
    """Raised on empty or oversized user input."""

    def __init__(self, message: str) -> None:
        super().__init__("VALIDATION_ERROR", message)


class ConflictError(QuickGitError):
    """Raised on local directory or remote name collisions."""

    pass


class NameConflict(ConflictError):
    """Raised when the provider reports the repository name is taken."""

    pass


class AuthenticationFailed(QuickGitError):
    """Raised when the provider rejects the credentials."""

    pass


class ProviderError(QuickGitError):
    """Raised on any other provider failure (non-2xx, network, malformed body)."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int | None = None,
        platform: str | None = None,
    ) -> None:
        super().__init__(code, message)
        self.status_code = status_code
        self.platform = platform


class NotFoundError(ProviderError):
    """Raised when a provider resource does not exist."""

    pass


class SshAuthError(QuickGitError):
    """Raised when a push is rejected for SSH key or permission reasons."""

    def __init__(self, message: str, guidance: str) -> None:
        super().__init__("SSH_AUTH_FAILED", message)
        self.guidance = guidance


class LocalVcsError(QuickGitError):
    """Raised when a local git command or file operation fails."""

    def __init__(
        self, message: str, command: list[str] | None = None, stderr: str = ""
    ) -> None:
        super().__init__("LOCAL_VCS_ERROR", message)
        self.command = command or []
        self.stderr = stderr


class UserCancelled(QuickGitError):
    """Raised when the user explicitly opts out of the workflow."""

    def __init__(self, message: str = "Operation cancelled by user") -> None:
        super().__init__("USER_CANCELLED", message)
