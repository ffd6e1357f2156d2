"""
Naming and location conflict resolution.

Runs before anything is created: a colliding local directory or remote
repository name is resolved through the prompter, or the attempt is
cancelled.
"""

from pathlib import Path

from quickgit.auth import AuthRetryPolicy
from quickgit.exceptions import ProviderError, UserCancelled
from quickgit.logging import get_logger
from quickgit.prompts import Prompter
from quickgit.providers.base import ProviderGateway
from quickgit.types.request import Platform, validate_name

logger = get_logger("conflicts")


class ConflictResolver:
    """Returns a conflict-free repository name or raises ``UserCancelled``."""

    def __init__(
        self,
        prompter: Prompter,
        gateway: ProviderGateway,
        policy: AuthRetryPolicy,
        workdir: str | Path = ".",
    ) -> None:
        self.prompter = prompter
        self.gateway = gateway
        self.policy = policy
        self.workdir = Path(workdir)

    def resolve_local(self, candidate: str) -> str:
        """
        Resolve a collision with an existing directory named ``candidate``.

        Raises:
            UserCancelled: If the user cancels
        """
        if not (self.workdir / candidate).exists():
            return candidate

        action = self.prompter.select(
            f"Directory {candidate} already exists. What do you want to do?",
            [
                ("current", "Initialize in the current directory"),
                ("new", "Use a new directory name"),
                ("cancel", "Cancel"),
            ],
        )

        if action == "cancel":
            raise UserCancelled()

        if action == "new":
            new_name = self.prompter.text(
                "New directory name",
                default=f"{candidate}-new",
                validate=lambda value: validate_name(value, "Directory name"),
            )
            logger.info(f"Using new name {new_name}")
            return new_name

        logger.info(
            f"Initializing in {self.workdir.resolve()}; existing directory "
            f"{candidate} is reused and left untouched"
        )
        return candidate

    def resolve_remote(self, name: str, platform: Platform) -> str:
        """
        Resolve a collision with an existing remote repository.

        A renamed target is checked again until a free name is found.

        Raises:
            UserCancelled: If the user cancels
            AuthenticationFailed: If the credentials are rejected after a retry
        """
        while self._remote_taken(name, platform):
            action = self.prompter.select(
                f"Remote repository {name} already exists. What do you want to do?",
                [("rename", "Use a new name"), ("cancel", "Cancel")],
            )
            if action == "cancel":
                raise UserCancelled()

            name = self.prompter.text(
                "New repository name", default=f"{name}-new", validate=validate_name
            )
            logger.info(f"Using new repository name {name}")
        return name

    def _remote_taken(self, name: str, platform: Platform) -> bool:
        try:
            return self.policy.run(
                platform, lambda creds: self.gateway.exists(name, creds)
            )
        except ProviderError as e:
            # Fail closed: an existence check we cannot trust counts as taken
            logger.warning(f"Could not check remote {name}: {e.message}; treating as existing")
            return True
