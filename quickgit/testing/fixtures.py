"""
Pytest fixtures for testing the provisioning workflow.
"""

from pathlib import Path
from typing import Any, Generator

import pytest

from quickgit.orchestrator import ProvisioningOrchestrator
from quickgit.testing.mock import (
    FakeGitHelper,
    MemoryConfigStore,
    MockGateway,
    ScriptedPrompter,
    StaticAuthenticator,
)
from quickgit.types.credentials import PlatformCredentials, QuickGitConfig
from quickgit.types.request import Platform, ProvisioningRequest, Visibility


# ============================================================================
# Helper functions
# ============================================================================


def create_request(**overrides: Any) -> ProvisioningRequest:
    """Create a ProvisioningRequest with sensible defaults."""
    defaults: dict[str, Any] = {
        "name": "demo",
        "platform": Platform.GITHUB,
        "visibility": Visibility.PUBLIC,
        "description": "x",
        "main_branch": "main",
        "develop_branch": None,
        "need_dev_branch": False,
    }
    defaults.update(overrides)
    return ProvisioningRequest(**defaults)


def create_credentials(username: str = "octocat", token: str = "token-1") -> PlatformCredentials:
    """Create PlatformCredentials for tests."""
    return PlatformCredentials(username=username, token=token)


# ============================================================================
# Collaborator fixtures
# ============================================================================


@pytest.fixture
def sample_credentials() -> PlatformCredentials:
    """Provide GitHub test credentials."""
    return create_credentials()


@pytest.fixture
def sample_request() -> ProvisioningRequest:
    """Provide the conflict-free ``demo`` request on GitHub."""
    return create_request()


@pytest.fixture
def memory_store(sample_credentials: PlatformCredentials) -> MemoryConfigStore:
    """Provide an in-memory config store holding GitHub credentials."""
    config = QuickGitConfig()
    config.platforms[Platform.GITHUB] = sample_credentials
    config.default_branch = "main"
    return MemoryConfigStore(config)


@pytest.fixture
def static_authenticator(sample_credentials: PlatformCredentials) -> StaticAuthenticator:
    """Provide an authenticator returning the sample credentials."""
    return StaticAuthenticator({
        Platform.GITHUB: [sample_credentials],
        Platform.GITEE: [create_credentials("gitee-user", "gitee-token")],
    })


@pytest.fixture
def mock_gateway() -> Generator[MockGateway, None, None]:
    """
    Provide a MockGateway for GitHub.

    Example:
        ```python
        def test_my_feature(mock_gateway):
            mock_gateway.configure_exists(existing=["demo"])
            ...
            assert mock_gateway.was_called("create_repository")
        ```
    """
    gateway = MockGateway(Platform.GITHUB)
    yield gateway
    gateway.reset()


@pytest.fixture
def scripted_prompter() -> ScriptedPrompter:
    """Provide a prompter without answers; add them with ``add()``."""
    return ScriptedPrompter()


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Provide an empty working directory."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def fake_git(workdir: Path) -> FakeGitHelper:
    """Provide a FakeGitHelper bound to the working directory."""
    return FakeGitHelper(workdir)


@pytest.fixture
def orchestrator(
    memory_store: MemoryConfigStore,
    scripted_prompter: ScriptedPrompter,
    static_authenticator: StaticAuthenticator,
    mock_gateway: MockGateway,
    workdir: Path,
    fake_git: FakeGitHelper,
) -> ProvisioningOrchestrator:
    """Provide an orchestrator wired to the test doubles, SSH check disabled."""
    return ProvisioningOrchestrator(
        store=memory_store,
        prompter=scripted_prompter,
        authenticator=static_authenticator,
        gateway_factory=lambda platform: mock_gateway,
        workdir=workdir,
        git=fake_git,
        ssh_check=None,
    )
