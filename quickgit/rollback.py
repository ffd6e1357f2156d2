"""
Rollback of local provisioning artifacts.

The remote repository is never touched here: once created it persists even
when local initialization fails.
"""

import shutil
from pathlib import Path

from quickgit.logging import get_logger
from quickgit.types.attempt import Artifact, ArtifactKind, ProvisioningAttempt

logger = get_logger("rollback")


class RollbackManager:
    """
    Tracks the local artifacts of one attempt and reverts them on failure.

    Reverting walks the artifacts in reverse order of creation. A failure to
    remove one artifact is logged as a warning and the walk continues, so
    ``revert()`` never raises past its caller.
    """

    def __init__(self, attempt: ProvisioningAttempt) -> None:
        """
        Initialize rollback manager.

        Args:
            attempt: The attempt whose artifact list this manager owns
        """
        self.attempt = attempt

    @property
    def artifacts(self) -> list[Artifact]:
        return list(self.attempt.artifacts)

    def record_artifact(
        self,
        kind: ArtifactKind,
        path: Path | str,
        previous_content: bytes | None = None,
    ) -> Artifact:
        """
        Record a local artifact created during the attempt.

        Args:
            kind: Kind of artifact
            path: Filesystem path, or branch name for pushed branches
            previous_content: Content the file had before the attempt overwrote it

        Returns:
            The recorded artifact
        """
        artifact = Artifact(kind=ArtifactKind(kind), path=path, previous_content=previous_content)
        self.attempt.record(artifact)
        logger.debug(f"Recorded {artifact.kind.value} artifact {path}")
        return artifact

    def revert(self) -> list[Artifact]:
        """
        Revert every recorded local artifact, newest first.

        Returns:
            Artifacts that could not be reverted
        """
        failed: list[Artifact] = []

        for artifact in reversed(self.attempt.artifacts):
            try:
                self._revert_one(artifact)
            except OSError as e:
                logger.warning(f"Could not revert {artifact.kind.value} {artifact.path}: {e}")
                failed.append(artifact)

        if failed:
            logger.warning(f"Rollback incomplete: {len(failed)} artifact(s) left behind")
        else:
            logger.info("Rolled back local changes")
        return failed

    def _revert_one(self, artifact: Artifact) -> None:
        if artifact.kind is ArtifactKind.VCS_METADATA:
            path = Path(artifact.path)
            if path.exists():
                shutil.rmtree(path)

        elif artifact.kind is ArtifactKind.IGNORE_FILE:
            path = Path(artifact.path)
            if artifact.previous_content is not None:
                path.write_bytes(artifact.previous_content)
            else:
                path.unlink(missing_ok=True)

        elif artifact.kind is ArtifactKind.PUSHED_BRANCH:
            # Pushed branches live on the remote, which rollback leaves alone
            logger.info(f"Leaving remote branch {artifact.path} in place")
