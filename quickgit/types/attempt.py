"""
Run-scoped provisioning attempt record.

The attempt is the unit of atomicity for rollback: it holds the workflow
state, the resolved repository name, the created remote and the local
artifacts recorded so far.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from quickgit.types.repos import RemoteRepository


class WorkflowState(str, Enum):
    """States of the provisioning workflow."""

    IDLE = "idle"
    COLLECTING_INFO = "collecting_info"
    RESOLVING_LOCAL_CONFLICT = "resolving_local_conflict"
    RESOLVING_REMOTE_CONFLICT = "resolving_remote_conflict"
    ACQUIRING_AUTH = "acquiring_auth"
    CREATING_REMOTE = "creating_remote"
    INITIALIZING_LOCAL = "initializing_local"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


WORKFLOW_SEQUENCE = (
    WorkflowState.IDLE,
    WorkflowState.COLLECTING_INFO,
    WorkflowState.RESOLVING_LOCAL_CONFLICT,
    WorkflowState.RESOLVING_REMOTE_CONFLICT,
    WorkflowState.ACQUIRING_AUTH,
    WorkflowState.CREATING_REMOTE,
    WorkflowState.INITIALIZING_LOCAL,
    WorkflowState.SUCCEEDED,
)

TERMINAL_STATES = frozenset(
    {WorkflowState.SUCCEEDED, WorkflowState.FAILED, WorkflowState.CANCELLED}
)


class ArtifactKind(str, Enum):
    """Kinds of local artifacts created during an attempt."""

    IGNORE_FILE = "ignore_file"
    VCS_METADATA = "vcs_metadata"
    PUSHED_BRANCH = "pushed_branch"


@dataclass(frozen=True)
class Artifact:
    """A local artifact recorded for rollback."""

    kind: ArtifactKind
    path: Path | str  # branch name for PUSHED_BRANCH
    previous_content: bytes | None = None


@dataclass
class ProvisioningAttempt:
    """Mutable record of one provisioning attempt."""

    state: WorkflowState = WorkflowState.IDLE
    repo_name: str | None = None
    remote: RemoteRepository | None = None
    local_step: int = 0
    artifacts: list[Artifact] = field(default_factory=list)
    error: Exception | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def remote_address(self) -> str | None:
        return self.remote.ssh_url if self.remote else None

    @property
    def pushed_branches(self) -> list[str]:
        return [
            str(a.path) for a in self.artifacts if a.kind is ArtifactKind.PUSHED_BRANCH
        ]

    def advance(self, state: WorkflowState) -> None:
        """
        Move to the next state of the workflow.

        Linear progression only; FAILED and CANCELLED are reachable from any
        non-terminal state.

        Raises:
            RuntimeError: On an illegal transition
        """
        if self.is_terminal:
            raise RuntimeError(f"Attempt already finished in state {self.state.value}")

        if state in (WorkflowState.FAILED, WorkflowState.CANCELLED):
            self.state = state
            return

        current = WORKFLOW_SEQUENCE.index(self.state)
        target = WORKFLOW_SEQUENCE.index(state)
        if target != current + 1:
            raise RuntimeError(
                f"Illegal transition {self.state.value} -> {state.value}"
            )
        if state is WorkflowState.INITIALIZING_LOCAL and self.remote is None:
            raise RuntimeError("Local initialization requires a created remote")
        self.state = state

    def record(self, artifact: Artifact) -> None:
        """
        Append an artifact.

        Raises:
            RuntimeError: If the attempt already reached a terminal state
        """
        if self.is_terminal:
            raise RuntimeError("Cannot record artifacts on a finished attempt")
        self.artifacts.append(artifact)
