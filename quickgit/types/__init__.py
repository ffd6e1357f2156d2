"""quickgit type definitions.

This module exports all data model types used by the package.
"""

from quickgit.types.attempt import (
    Artifact,
    ArtifactKind,
    ProvisioningAttempt,
    WorkflowState,
)
from quickgit.types.credentials import PlatformCredentials, QuickGitConfig
from quickgit.types.repos import RemoteRepository
from quickgit.types.request import Platform, ProvisioningRequest, Visibility

__all__ = [
    # Request types
    "Platform",
    "Visibility",
    "ProvisioningRequest",
    # Credential and config types
    "PlatformCredentials",
    "QuickGitConfig",
    # Remote types
    "RemoteRepository",
    # Attempt types
    "WorkflowState",
    "ArtifactKind",
    "Artifact",
    "ProvisioningAttempt",
]
