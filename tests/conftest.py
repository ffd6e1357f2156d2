"""Shared fixtures for the quickgit test suite."""

from quickgit.testing.conftest import *  # noqa: F401,F403
