"""
Test doubles for the provisioning workflow.

Provides an in-memory provider gateway, a scripted prompter, an in-memory
config store, a static authenticator and a git helper that records commands
instead of running them.
"""

import copy
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from quickgit.exceptions import LocalVcsError
from quickgit.git import GitHelper
from quickgit.prompts import Choice, Validator
from quickgit.types.credentials import PlatformCredentials, QuickGitConfig
from quickgit.types.repos import RemoteRepository
from quickgit.types.request import Platform, Visibility


@dataclass
class MockCall:
    """Record of a method call."""

    method: str
    args: tuple[Any, ...]
    kwargs: dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class MockGateway:
    """
    In-memory provider gateway.

    Example:
        ```python
        from quickgit.exceptions import AuthenticationFailed
        from quickgit.testing import MockGateway

        gateway = MockGateway(existing=["demo"])
        gateway.configure_create(errors=[AuthenticationFailed("AUTH", "bad token")])

        assert gateway.exists("demo", creds)
        # First create raises, the second one succeeds
        ```
    """

    def __init__(
        self,
        platform: Platform = Platform.GITHUB,
        existing: Iterable[str] = (),
    ) -> None:
        self.platform = Platform(platform)
        self.existing: set[str] = set(existing)
        self.created: list[RemoteRepository] = []
        self.closed = False
        self._calls: list[MockCall] = []
        self._create_errors: list[Exception] = []
        self._exists_errors: list[Exception] = []
        self._ssh_url: str | None = None

    def configure_create(
        self,
        errors: Sequence[Exception] = (),
        ssh_url: str | None = None,
    ) -> None:
        """
        Configure create_repository().

        Args:
            errors: Raised one per call, in order, before calls start succeeding
            ssh_url: Fixed remote address to return (default: derived from the name)
        """
        self._create_errors = list(errors)
        self._ssh_url = ssh_url

    def configure_exists(
        self,
        existing: Iterable[str] | None = None,
        errors: Sequence[Exception] = (),
    ) -> None:
        """Configure exists(): the taken names and errors raised one per call."""
        if existing is not None:
            self.existing = set(existing)
        self._exists_errors = list(errors)

    def create_repository(
        self,
        name: str,
        visibility: Visibility,
        description: str,
        credentials: PlatformCredentials,
    ) -> RemoteRepository:
        self._record_call("create_repository", (name, visibility, description), {"credentials": credentials})
        if self._create_errors:
            raise self._create_errors.pop(0)

        owner = credentials.username or "mock-user"
        repo = RemoteRepository(
            name=name,
            platform=self.platform,
            visibility=Visibility(visibility),
            description=description,
            ssh_url=self._ssh_url or f"git@{self.platform.host}:{owner}/{name}.git",
            html_url=f"https://{self.platform.host}/{owner}/{name}",
        )
        self.existing.add(name)
        self.created.append(repo)
        return repo

    def exists(self, name: str, credentials: PlatformCredentials) -> bool:
        self._record_call("exists", (name,), {"credentials": credentials})
        if self._exists_errors:
            raise self._exists_errors.pop(0)
        return name in self.existing

    def _record_call(self, method: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        """Record a method call for verification."""
        self._calls.append(MockCall(method=method, args=args, kwargs=kwargs))

    def was_called(self, method: str) -> bool:
        return any(call.method == method for call in self._calls)

    def call_count(self, method: str) -> int:
        return sum(1 for call in self._calls if call.method == method)

    def get_calls(self, method: str | None = None) -> list[MockCall]:
        """Get recorded calls, optionally filtered by method."""
        if method is None:
            return list(self._calls)
        return [call for call in self._calls if call.method == method]

    def reset(self) -> None:
        """Reset recorded calls and configured errors."""
        self._calls.clear()
        self._create_errors.clear()
        self._exists_errors.clear()
        self.created.clear()

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "MockGateway":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class ScriptedPrompter:
    """
    Prompter that replays scripted answers in order.

    A ``None`` answer to ``text`` takes the default. An answer rejected by the
    validator is recorded in ``rejected`` and the next answer is used, the same
    way a console prompt would ask again.
    """

    def __init__(self, answers: Iterable[Any] = ()) -> None:
        self.answers: list[Any] = list(answers)
        self.asked: list[tuple[str, str]] = []
        self.rejected: list[tuple[str, str]] = []

    def add(self, *answers: Any) -> None:
        self.answers.extend(answers)

    def select(self, message: str, choices: Sequence[Choice], default: str | None = None) -> str:
        self.asked.append(("select", message))
        answer = self._next(message)
        values = [value for value, _ in choices]
        if answer not in values:
            raise AssertionError(f"Scripted answer {answer!r} is not one of {values} for {message!r}")
        return answer

    def text(self, message: str, default: str | None = None, validate: Validator | None = None) -> str:
        self.asked.append(("text", message))
        while True:
            answer = self._next(message)
            if answer is None:
                answer = default or ""
            error = validate(answer) if validate else None
            if error is None:
                return answer
            self.rejected.append((message, error))

    def confirm(self, message: str, default: bool = False) -> bool:
        self.asked.append(("confirm", message))
        return bool(self._next(message))

    def secret(self, message: str) -> str:
        self.asked.append(("secret", message))
        return self._next(message)

    def _next(self, message: str) -> Any:
        if not self.answers:
            raise AssertionError(f"No scripted answer left for prompt {message!r}")
        return self.answers.pop(0)


class MemoryConfigStore:
    """In-memory configuration store."""

    def __init__(self, config: QuickGitConfig | None = None) -> None:
        self._config = copy.deepcopy(config) if config else QuickGitConfig()
        self.save_count = 0
        self.cleared: list[Platform] = []

    def load(self) -> QuickGitConfig:
        return copy.deepcopy(self._config)

    def save(self, config: QuickGitConfig) -> None:
        self._config = copy.deepcopy(config)
        self.save_count += 1

    def clear_credentials(self, platform: Platform) -> None:
        self._config.platforms[Platform(platform)] = PlatformCredentials()
        self.cleared.append(Platform(platform))


class StaticAuthenticator:
    """
    Authenticator handing out a fixed sequence of credentials.

    Each ``ensure`` call returns the next credentials for the platform; the
    last ones are repeated once the sequence is exhausted.
    """

    def __init__(self, credentials: dict[Platform, Sequence[PlatformCredentials]]) -> None:
        self._credentials = {Platform(p): list(c) for p, c in credentials.items()}
        self.calls: list[Platform] = []

    def ensure(self, platform: Platform) -> PlatformCredentials:
        platform = Platform(platform)
        self.calls.append(platform)
        queue = self._credentials[platform]
        return queue.pop(0) if len(queue) > 1 else queue[0]


class FakeGitHelper(GitHelper):
    """
    Git helper that records commands instead of running git.

    ``init`` creates an empty ``.git`` directory so that rollback has real
    metadata to remove. Commands named in ``fail_on`` raise ``LocalVcsError``
    with the mapped stderr, or the mapped exception itself when it is one.
    ``inside_work_tree`` is the answer to ``rev-parse --is-inside-work-tree``.
    """

    def __init__(
        self,
        workdir: str | Path = ".",
        fail_on: dict[str, str | Exception] | None = None,
        inside_work_tree: bool = False,
    ) -> None:
        super().__init__(workdir)
        self.commands: list[tuple[str, ...]] = []
        self.fail_on = dict(fail_on or {})
        self.inside_work_tree = inside_work_tree

    def run(self, *args: str) -> str:
        self.commands.append(args)
        name = args[0]
        if name in self.fail_on:
            failure = self.fail_on[name]
            if isinstance(failure, Exception):
                raise failure
            raise LocalVcsError(f"git {name} failed: {failure}", command=["git", *args], stderr=failure)
        if name == "init":
            self.git_dir.mkdir(exist_ok=True)
        if args == ("rev-parse", "--is-inside-work-tree"):
            return "true\n" if self.inside_work_tree else "false\n"
        return ""

    def ran(self, *args: str) -> bool:
        """True if a command with exactly these arguments was run."""
        return tuple(args) in self.commands
