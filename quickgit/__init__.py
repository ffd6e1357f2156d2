"""quickgit - create a hosted repository and bind a fresh local repository to it."""

from quickgit.auth import Authenticator, AuthRetryPolicy, PromptAuthenticator
from quickgit.config import ConfigStore
from quickgit.conflicts import ConflictResolver
from quickgit.exceptions import (
    AuthenticationFailed,
    ConfigurationError,
    ConflictError,
    LocalVcsError,
    NameConflict,
    NotFoundError,
    ProviderError,
    QuickGitError,
    SshAuthError,
    UserCancelled,
    ValidationError,
)
from quickgit.git import GitHelper
from quickgit.local import LocalRepoInitializer
from quickgit.logging import configure_logging, get_logger
from quickgit.orchestrator import ProvisioningOrchestrator
from quickgit.prompts import ConsolePrompter, Prompter
from quickgit.providers import GiteeGateway, GitHubGateway, ProviderGateway
from quickgit.rollback import RollbackManager
from quickgit.transport import HTTPTransport
from quickgit.types import (
    Platform,
    PlatformCredentials,
    ProvisioningAttempt,
    ProvisioningRequest,
    RemoteRepository,
    Visibility,
    WorkflowState,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Orchestration
    "ProvisioningOrchestrator",
    "ConflictResolver",
    "LocalRepoInitializer",
    "RollbackManager",
    # Providers
    "ProviderGateway",
    "GitHubGateway",
    "GiteeGateway",
    "HTTPTransport",
    # Auth and config
    "AuthRetryPolicy",
    "Authenticator",
    "PromptAuthenticator",
    "ConfigStore",
    # Collaborators
    "GitHelper",
    "Prompter",
    "ConsolePrompter",
    # Types
    "Platform",
    "Visibility",
    "ProvisioningRequest",
    "PlatformCredentials",
    "ProvisioningAttempt",
    "RemoteRepository",
    "WorkflowState",
    # Exceptions
    "QuickGitError",
    "ConfigurationError",
    "ValidationError",
    "ConflictError",
    "NameConflict",
    "AuthenticationFailed",
    "ProviderError",
    "NotFoundError",
    "SshAuthError",
    "LocalVcsError",
    "UserCancelled",
    # Logging
    "configure_logging",
    "get_logger",
]
