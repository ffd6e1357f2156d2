"""Remote repository data models."""

from dataclasses import dataclass

from quickgit.types.request import Platform, Visibility


@dataclass(frozen=True)
class RemoteRepository:
    """Repository as created on the provider side."""

    name: str
    platform: Platform
    visibility: Visibility
    description: str
    ssh_url: str  # the remote address attached as "origin"
    html_url: str | None = None
