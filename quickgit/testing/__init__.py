"""quickgit testing utilities.

Provides test doubles and fixtures for testing code built on quickgit.
"""

from quickgit.testing.fixtures import create_credentials, create_request
from quickgit.testing.mock import (
    FakeGitHelper,
    MemoryConfigStore,
    MockCall,
    MockGateway,
    ScriptedPrompter,
    StaticAuthenticator,
)

__all__ = [
    # Test doubles
    "MockGateway",
    "MockCall",
    "ScriptedPrompter",
    "MemoryConfigStore",
    "StaticAuthenticator",
    "FakeGitHelper",
    # Helper functions
    "create_request",
    "create_credentials",
]
