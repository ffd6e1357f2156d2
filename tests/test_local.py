"""
Tests for the local repository initialization sequence.

Feature: quickgit
"""

import shutil
import subprocess
from pathlib import Path

import pytest

from quickgit.exceptions import LocalVcsError, SshAuthError
from quickgit.git import GitHelper
from quickgit.local import INITIAL_COMMIT_MESSAGE, LocalRepoInitializer
from quickgit.rollback import RollbackManager
from quickgit.testing import FakeGitHelper, create_request
from quickgit.types import ProvisioningAttempt, RemoteRepository
from quickgit.types.attempt import ArtifactKind

REMOTE = "git@github.com:octocat/demo.git"


def run_initializer(git: GitHelper, request, remote: str = REMOTE) -> ProvisioningAttempt:
    attempt = ProvisioningAttempt(
        remote=RemoteRepository(
            name=request.name,
            platform=request.platform,
            visibility=request.visibility,
            description=request.description,
            ssh_url=remote,
        )
    )
    LocalRepoInitializer(git, RollbackManager(attempt), template=lambda: "*.log\n").run(
        attempt, remote, request
    )
    return attempt


def test_sequence_without_dev_branch(fake_git: FakeGitHelper, workdir: Path) -> None:
    attempt = run_initializer(fake_git, create_request(main_branch="main"))

    assert fake_git.commands == [
        ("init",),
        ("add", "--", ".gitignore"),
        ("commit", "-m", INITIAL_COMMIT_MESSAGE),
        ("remote", "add", "origin", REMOTE),
        ("push", "-u", "origin", "HEAD:main"),
        ("branch", "-M", "main"),
    ]
    assert (workdir / ".gitignore").read_text() == "*.log\n"
    assert attempt.local_step == 7
    assert attempt.pushed_branches == ["main"]
    assert [a.kind for a in attempt.artifacts] == [
        ArtifactKind.IGNORE_FILE,
        ArtifactKind.VCS_METADATA,
        ArtifactKind.PUSHED_BRANCH,
    ]


def test_sequence_with_dev_branch(fake_git: FakeGitHelper) -> None:
    request = create_request(main_branch="main", need_dev_branch=True, develop_branch="develop")

    attempt = run_initializer(fake_git, request)

    assert fake_git.commands[-3:] == [
        ("checkout", "-b", "develop"),
        ("push", "-u", "origin", "develop"),
        ("checkout", "main"),
    ]
    assert attempt.pushed_branches == ["main", "develop"]


@pytest.mark.parametrize(
    "need_dev_branch,develop_branch",
    [(True, "main"), (True, None), (False, "develop")],
)
def test_no_dev_branch_when_not_distinct(
    fake_git: FakeGitHelper, need_dev_branch: bool, develop_branch: str | None
) -> None:
    request = create_request(
        main_branch="main", need_dev_branch=need_dev_branch, develop_branch=develop_branch
    )

    attempt = run_initializer(fake_git, request)

    assert not any(cmd[0] == "checkout" for cmd in fake_git.commands)
    assert attempt.pushed_branches == ["main"]


def test_publickey_denied_becomes_ssh_error(workdir: Path) -> None:
    git = FakeGitHelper(workdir, fail_on={
        "push": "git@github.com: Permission denied (publickey).\nfatal: Could not read from remote repository.",
    })

    with pytest.raises(SshAuthError) as exc_info:
        run_initializer(git, create_request())

    assert "ssh -T git@github.com" in exc_info.value.guidance


def test_other_push_failure_propagates(workdir: Path) -> None:
    git = FakeGitHelper(workdir, fail_on={"push": "fatal: unable to access remote"})

    with pytest.raises(LocalVcsError) as exc_info:
        run_initializer(git, create_request())

    assert not isinstance(exc_info.value, SshAuthError)
    assert ("branch", "-M", "main") not in git.commands


def test_failure_stops_sequence(workdir: Path) -> None:
    git = FakeGitHelper(workdir, fail_on={"commit": "Please tell me who you are."})

    with pytest.raises(LocalVcsError):
        run_initializer(git, create_request())

    assert [cmd[0] for cmd in git.commands] == ["init", "add", "commit"]


def test_existing_ignore_file_content_is_remembered(fake_git: FakeGitHelper, workdir: Path) -> None:
    (workdir / ".gitignore").write_text("mine\n")

    attempt = run_initializer(fake_git, create_request())

    assert attempt.artifacts[0].previous_content == b"mine\n"


# ============================================================================
# End to end against a real git and a local bare remote
# ============================================================================


def _git(*args: str, cwd: Path) -> str:
    return subprocess.run(
        ["git", *args], cwd=cwd, check=True, capture_output=True, text=True
    ).stdout.strip()


@pytest.fixture
def isolated_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate git from user config and give it an identity."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    for var, value in {
        "GIT_AUTHOR_NAME": "Test",
        "GIT_AUTHOR_EMAIL": "test@example.com",
        "GIT_COMMITTER_NAME": "Test",
        "GIT_COMMITTER_EMAIL": "test@example.com",
    }.items():
        monkeypatch.setenv(var, value)

    remote = tmp_path / "remote.git"
    subprocess.run(["git", "init", "--bare", str(remote)], check=True, capture_output=True)
    return remote


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
def test_real_git_with_dev_branch(isolated_git: Path, workdir: Path) -> None:
    request = create_request(main_branch="main", need_dev_branch=True, develop_branch="develop")

    run_initializer(GitHelper(workdir), request, remote=str(isolated_git))

    git = GitHelper(workdir)
    assert git.current_branch() == "main"
    assert git.commit_count() == 1
    assert git.remote_url("origin") == str(isolated_git)
    heads = _git("for-each-ref", "--format=%(refname:short)", "refs/heads", cwd=isolated_git)
    assert sorted(heads.split()) == ["develop", "main"]
    assert _git("ls-files", cwd=workdir) == ".gitignore"
