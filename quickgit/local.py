"""Local repository initialization."""

from pathlib import Path

from quickgit.exceptions import LocalVcsError, SshAuthError
from quickgit.git import GitHelper
from quickgit.logging import get_logger
from quickgit.rollback import RollbackManager
from quickgit.templates import GITIGNORE_FILENAME, IgnoreTemplate, default_gitignore
from quickgit.types.attempt import ArtifactKind, ProvisioningAttempt
from quickgit.types.request import ProvisioningRequest

logger = get_logger("local")

INITIAL_COMMIT_MESSAGE = "chore: add .gitignore"
REMOTE_NAME = "origin"
_PUBLICKEY_DENIED = "Permission denied (publickey)"

SSH_GUIDANCE = (
    "Make sure an SSH key is loaded (ssh-add -l) and registered with your "
    "account, then check access with: ssh -T git@{host}"
)


class LocalRepoInitializer:
    """
    Initializes the working directory and binds it to the created remote.

    Every artifact is recorded with the rollback manager before the next
    step runs; any failure aborts the remaining steps and propagates.
    """

    def __init__(
        self,
        git: GitHelper,
        rollback: RollbackManager,
        template: IgnoreTemplate = default_gitignore,
    ) -> None:
        self.git = git
        self.rollback = rollback
        self.template = template

    @property
    def workdir(self) -> Path:
        return self.git.workdir

    def run(
        self,
        attempt: ProvisioningAttempt,
        remote_address: str,
        request: ProvisioningRequest,
    ) -> None:
        """
        Run the local sequence.

        Raises:
            SshAuthError: If the first push is rejected for key reasons
            LocalVcsError: If any other step fails
        """
        main = request.main_branch

        attempt.local_step = 1
        self._write_ignore_file()

        attempt.local_step = 2
        self.git.init()
        self.rollback.record_artifact(ArtifactKind.VCS_METADATA, self.git.git_dir)
        logger.info(f"Initialized git repository in {self.workdir}")

        attempt.local_step = 3
        self.git.add(GITIGNORE_FILENAME)
        self.git.commit(INITIAL_COMMIT_MESSAGE)
        logger.info("Created initial commit")

        attempt.local_step = 4
        self.git.add_remote(REMOTE_NAME, remote_address)
        logger.info(f"Added remote {REMOTE_NAME} -> {remote_address}")

        attempt.local_step = 5
        self._push_main(main, request)
        self.rollback.record_artifact(ArtifactKind.PUSHED_BRANCH, main)

        attempt.local_step = 6
        self.git.rename_branch(main)
        logger.info(f"Main branch is {main}")

        attempt.local_step = 7
        if request.wants_dev_branch:
            develop = request.develop_branch
            self.git.checkout_new_branch(develop)
            logger.info(f"Created and switched to {develop}")
            self.git.push(REMOTE_NAME, develop, set_upstream=True)
            self.rollback.record_artifact(ArtifactKind.PUSHED_BRANCH, develop)
            logger.info(f"Pushed {develop} to {REMOTE_NAME}")
            self.git.checkout(main)
            logger.info(f"Switched back to {main}")

    def _write_ignore_file(self) -> None:
        path = self.workdir / GITIGNORE_FILENAME
        try:
            previous = path.read_bytes() if path.is_file() else None
            path.write_text(self.template(), encoding="utf-8")
        except OSError as e:
            raise LocalVcsError(f"Failed to write {GITIGNORE_FILENAME}: {e}") from e
        self.rollback.record_artifact(ArtifactKind.IGNORE_FILE, path, previous)
        logger.info(f"Wrote {GITIGNORE_FILENAME}")

    def _push_main(self, main: str, request: ProvisioningRequest) -> None:
        try:
            self.git.push(REMOTE_NAME, f"HEAD:{main}", set_upstream=True)
        except LocalVcsError as e:
            if _PUBLICKEY_DENIED in e.stderr:
                raise SshAuthError(
                    "SSH authentication failed while pushing; check your SSH key setup",
                    guidance=SSH_GUIDANCE.format(host=request.platform.host),
                ) from e
            raise
        logger.info(f"Pushed {main} to {REMOTE_NAME}")
