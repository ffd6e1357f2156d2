"""
Repository provisioning orchestrator.

Implements the provisioning flow:
  idle -> collecting_info -> resolving_local_conflict
  -> resolving_remote_conflict -> acquiring_auth -> creating_remote
  -> initializing_local -> succeeded

Any step may end in ``failed``; a user opt-out ends in ``cancelled``.
Failures during local initialization roll the local changes back first.
"""

from collections.abc import Callable
from pathlib import Path

from quickgit.auth import Authenticator, AuthRetryPolicy, PromptAuthenticator
from quickgit.config import ConfigStoreProtocol
from quickgit.conflicts import ConflictResolver
from quickgit.exceptions import LocalVcsError, QuickGitError, SshAuthError, UserCancelled
from quickgit.git import GitHelper
from quickgit.local import LocalRepoInitializer
from quickgit.logging import get_logger
from quickgit.prompts import Prompter
from quickgit.providers.base import ProviderGateway
from quickgit.questions import RequestCollector
from quickgit.rollback import RollbackManager
from quickgit.ssh import check_ssh_access, ssh_setup_guide
from quickgit.templates import IgnoreTemplate, default_gitignore
from quickgit.types.attempt import ProvisioningAttempt, WorkflowState
from quickgit.types.request import Platform, ProvisioningRequest

logger = get_logger()

GatewayFactory = Callable[[Platform], ProviderGateway]
SshCheck = Callable[[Platform], bool]


class ProvisioningOrchestrator:
    """
    Sequences conflict resolution, remote creation and local initialization.

    Example:
        ```python
        from quickgit.config import ConfigStore
        from quickgit.orchestrator import ProvisioningOrchestrator
        from quickgit.prompts import ConsolePrompter

        orchestrator = ProvisioningOrchestrator(
            store=ConfigStore.from_env(),
            prompter=ConsolePrompter(),
        )
        ok = orchestrator.initialize()
        ```
    """

    def __init__(
        self,
        store: ConfigStoreProtocol,
        prompter: Prompter,
        authenticator: Authenticator | None = None,
        gateway_factory: GatewayFactory = ProviderGateway.for_platform,
        workdir: str | Path = ".",
        git: GitHelper | None = None,
        template: IgnoreTemplate = default_gitignore,
        ssh_check: SshCheck | None = check_ssh_access,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            store: Configuration store holding credentials
            prompter: Prompt collaborator
            authenticator: Credential source (default: PromptAuthenticator)
            gateway_factory: Builds the gateway for a platform
            workdir: Directory the local repository is created in
            git: Git helper (default: GitHelper on ``workdir``)
            template: Ignore-file content supplier
            ssh_check: SSH pre-flight check, or None to skip it
        """
        self.store = store
        self.prompter = prompter
        self.authenticator = authenticator or PromptAuthenticator(store, prompter)
        self.policy = AuthRetryPolicy(store, self.authenticator)
        self.gateway_factory = gateway_factory
        self.workdir = Path(workdir)
        self.git = git or GitHelper(self.workdir)
        self.template = template
        self.ssh_check = ssh_check
        self.attempt: ProvisioningAttempt | None = None

    def initialize(self, request: ProvisioningRequest | None = None) -> bool:
        """
        Run one provisioning attempt.

        Args:
            request: A ready request; collected interactively when None

        Returns:
            True on success; False on failure or cancellation
        """
        attempt = ProvisioningAttempt()
        self.attempt = attempt

        try:
            self._check_workdir()
            attempt.advance(WorkflowState.COLLECTING_INFO)
            if request is None:
                request = RequestCollector(self.prompter, self.store).collect()

            with self.gateway_factory(request.platform) as gateway:
                self._provision(attempt, request, gateway)

        except UserCancelled:
            attempt.advance(WorkflowState.CANCELLED)
            logger.info("Provisioning cancelled")
            return False

        except QuickGitError as e:
            attempt.error = e
            attempt.advance(WorkflowState.FAILED)
            logger.error(f"Provisioning failed: {e}")
            if isinstance(e, SshAuthError):
                logger.error(e.guidance)
            self._warn_orphaned_remote(attempt)
            return False

        except Exception as e:
            attempt.error = e
            attempt.advance(WorkflowState.FAILED)
            logger.exception(f"Provisioning failed unexpectedly: {e}")
            self._warn_orphaned_remote(attempt)
            return False

        attempt.advance(WorkflowState.SUCCEEDED)
        logger.info(f"Repository {attempt.repo_name} is ready at {attempt.remote_address}")
        return True

    def _provision(
        self,
        attempt: ProvisioningAttempt,
        request: ProvisioningRequest,
        gateway: ProviderGateway,
    ) -> None:
        platform = request.platform
        resolver = ConflictResolver(self.prompter, gateway, self.policy, self.workdir)

        attempt.advance(WorkflowState.RESOLVING_LOCAL_CONFLICT)
        name = resolver.resolve_local(request.name)

        attempt.advance(WorkflowState.RESOLVING_REMOTE_CONFLICT)
        name = resolver.resolve_remote(name, platform)
        attempt.repo_name = name

        attempt.advance(WorkflowState.ACQUIRING_AUTH)
        self.policy.credentials(platform)
        self._check_ssh(platform)

        attempt.advance(WorkflowState.CREATING_REMOTE)
        attempt.remote = self.policy.run(
            platform,
            lambda creds: gateway.create_repository(
                name, request.visibility, request.description, creds
            ),
        )
        logger.info(f"Remote repository created: {attempt.remote.ssh_url}")

        attempt.advance(WorkflowState.INITIALIZING_LOCAL)
        rollback = RollbackManager(attempt)
        initializer = LocalRepoInitializer(self.git, rollback, self.template)
        try:
            initializer.run(attempt, attempt.remote.ssh_url, request)
        except Exception:
            logger.error(f"Local initialization failed at step {attempt.local_step}, rolling back")
            rollback.revert()
            raise

    def _check_workdir(self) -> None:
        """
        Refuse a missing working directory or one already under version control.

        Raises:
            LocalVcsError: Before anything is asked or created
        """
        where = self.workdir.resolve()
        if not self.workdir.is_dir():
            raise LocalVcsError(f"Working directory {where} does not exist")
        if self.git.is_repository(self.workdir) or self.git.is_inside_work_tree():
            raise LocalVcsError(f"{where} is already inside a git repository")

    @staticmethod
    def _warn_orphaned_remote(attempt: ProvisioningAttempt) -> None:
        if attempt.remote is not None:
            logger.warning(
                f"Remote repository {attempt.remote.ssh_url} was created and is "
                "left in place; delete it on the provider if you do not need it"
            )

    def _check_ssh(self, platform: Platform) -> None:
        if self.ssh_check is None or self.ssh_check(platform):
            return

        logger.warning(ssh_setup_guide(platform))
        if not self.prompter.confirm("Continue anyway?", default=False):
            raise UserCancelled("Configure SSH access and try again")
