"""Hosting provider gateways."""

from quickgit.providers.base import ProviderGateway
from quickgit.providers.gitee import GiteeGateway
from quickgit.providers.github import GitHubGateway

__all__ = [
    "ProviderGateway",
    "GitHubGateway",
    "GiteeGateway",
]
