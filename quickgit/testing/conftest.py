"""
Pytest plugin with quickgit testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
discovered by pytest. To use them, import them in your conftest.py:

    from quickgit.testing.conftest import *  # noqa: F401,F403
"""

# Re-export all fixtures for pytest discovery
from quickgit.testing.fixtures import (
    fake_git,
    memory_store,
    mock_gateway,
    orchestrator,
    sample_credentials,
    sample_request,
    scripted_prompter,
    static_authenticator,
    workdir,
)

__all__ = [
    "fake_git",
    "memory_store",
    "mock_gateway",
    "orchestrator",
    "sample_credentials",
    "sample_request",
    "scripted_prompter",
    "static_authenticator",
    "workdir",
]
