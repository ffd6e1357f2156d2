"""
Git helper utilities.

Thin wrapper over the ``git`` executable for the local side of provisioning:
init, add, commit, remote add, push with upstream, branch rename and checkout.
"""

import subprocess
from pathlib import Path

from quickgit.exceptions import LocalVcsError
from quickgit.logging import log_git_command

GIT_DIR = ".git"


class GitHelper:
    """
    Runs git commands inside one working directory.

    Every failing command raises ``LocalVcsError`` carrying the command line
    and git's stderr.

    Example:
        ```python
        from quickgit.git import GitHelper

        git = GitHelper("./demo")
        git.init()
        git.add(".gitignore")
        git.commit("chore: add .gitignore")
        git.add_remote("origin", "git@github.com:octocat/demo.git")
        git.push("origin", "HEAD:main", set_upstream=True)
        ```
    """

    def __init__(self, workdir: str | Path = ".", executable: str = "git") -> None:
        """
        Initialize GitHelper.

        Args:
            workdir: Working directory of the repository
            executable: Git executable name or path
        """
        self.workdir = Path(workdir)
        self.executable = executable

    @staticmethod
    def is_repository(path: str | Path) -> bool:
        """True if ``path`` already holds git metadata."""
        return (Path(path) / GIT_DIR).exists()

    def is_inside_work_tree(self) -> bool:
        """
        True if the working directory belongs to an existing repository,
        including one rooted in a parent directory.
        """
        try:
            return self.run("rev-parse", "--is-inside-work-tree").strip() == "true"
        except LocalVcsError as e:
            # Exit status 128 with "not a git repository" is the normal answer
            if "not a git repository" in e.stderr:
                return False
            raise

    @property
    def git_dir(self) -> Path:
        return self.workdir / GIT_DIR

    def init(self) -> None:
        self.run("init")

    def add(self, *paths: str) -> None:
        self.run("add", "--", *paths)

    def commit(self, message: str) -> None:
        self.run("commit", "-m", message)

    def add_remote(self, name: str, url: str) -> None:
        self.run("remote", "add", name, url)

    def push(self, remote: str, refspec: str, set_upstream: bool = False) -> None:
        """
        Push ``refspec`` to ``remote``.

        Raises:
            LocalVcsError: If git push fails; stderr holds the reason
        """
        args = ["push"]
        if set_upstream:
            args.append("-u")
        args.extend([remote, refspec])
        self.run(*args)

    def rename_branch(self, name: str) -> None:
        """Force-rename the current branch (``git branch -M``)."""
        self.run("branch", "-M", name)

    def checkout_new_branch(self, name: str) -> None:
        self.run("checkout", "-b", name)

    def checkout(self, name: str) -> None:
        self.run("checkout", name)

    def current_branch(self) -> str:
        return self.run("rev-parse", "--abbrev-ref", "HEAD").strip()

    def remote_url(self, name: str = "origin") -> str:
        return self.run("remote", "get-url", name).strip()

    def commit_count(self) -> int:
        return int(self.run("rev-list", "--count", "HEAD").strip())

    def run(self, *args: str) -> str:
        """
        Run a git command in the working directory and return its stdout.

        Raises:
            LocalVcsError: If git is missing or the command exits non-zero
        """
        cmd = [self.executable, *args]
        log_git_command(cmd, cwd=str(self.workdir))

        try:
            result = subprocess.run(
                cmd,
                cwd=self.workdir,
                check=True,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise LocalVcsError(
                f"Command not found: {self.executable}. Is git installed and in your PATH?",
                command=cmd,
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise LocalVcsError(
                f"git {args[0]} failed: {stderr or f'exit status {e.returncode}'}",
                command=cmd,
                stderr=stderr,
            ) from e

        return result.stdout
