"""Provisioning request data models."""

from dataclasses import dataclass
from enum import Enum

from quickgit.exceptions import ValidationError

MAX_DESCRIPTION_LENGTH = 255


class Platform(str, Enum):
    """Supported hosting platforms."""

    GITHUB = "github"
    GITEE = "gitee"

    @property
    def host(self) -> str:
        return f"{self.value}.com"

    @property
    def display_name(self) -> str:
        return {"github": "GitHub", "gitee": "Gitee"}[self.value]


class Visibility(str, Enum):
    """Repository visibility."""

    PUBLIC = "public"
    PRIVATE = "private"

    @property
    def is_private(self) -> bool:
        return self is Visibility.PRIVATE


def validate_name(value: str, what: str = "Repository name") -> str | None:
    """Return an error message for an empty name, or None."""
    if not value or not value.strip():
        return f"{what} must not be empty"
    return None


def validate_description(value: str) -> str | None:
    """Return an error message for an oversized description, or None."""
    if len(value) > MAX_DESCRIPTION_LENGTH:
        return f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"
    return None


@dataclass(frozen=True)
class ProvisioningRequest:
    """
    Immutable input of one provisioning attempt.

    Raises:
        ValidationError: If a field is empty or the description is too long
    """

    name: str
    platform: Platform
    visibility: Visibility = Visibility.PUBLIC
    description: str = ""
    main_branch: str = "master"
    develop_branch: str | None = None
    need_dev_branch: bool = False

    def __post_init__(self) -> None:
        # Accept plain strings for the enum fields
        object.__setattr__(self, "platform", Platform(self.platform))
        object.__setattr__(self, "visibility", Visibility(self.visibility))

        for error in (
            validate_name(self.name),
            validate_name(self.main_branch, "Main branch name"),
            validate_description(self.description),
        ):
            if error:
                raise ValidationError(error)

    @property
    def wants_dev_branch(self) -> bool:
        """True when a develop branch distinct from the main branch is requested."""
        return (
            self.need_dev_branch
            and bool(self.develop_branch)
            and self.develop_branch != self.main_branch
        )
