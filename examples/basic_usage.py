#!/usr/bin/env python3
"""
Basic quickgit usage example.

Creates a repository from a ready request instead of asking the questions
interactively. Credentials are still prompted for when none are stored.
Run with: python examples/basic_usage.py <workdir> <name>
"""

import logging
import sys

from quickgit import (
    ConfigStore,
    ConsolePrompter,
    Platform,
    ProvisioningOrchestrator,
    ProvisioningRequest,
    QuickGitError,
    Visibility,
    configure_logging,
)

configure_logging(level=logging.INFO, git_level=logging.DEBUG)

if len(sys.argv) != 3:
    print("usage: basic_usage.py <workdir> <name>")
    sys.exit(2)

workdir, name = sys.argv[1], sys.argv[2]

try:
    request = ProvisioningRequest(
        name=name,
        platform=Platform.GITHUB,
        visibility=Visibility.PRIVATE,
        description="Created from the quickgit example",
        main_branch="main",
        develop_branch="develop",
        need_dev_branch=True,
    )
except QuickGitError as e:
    print(f"Invalid request: {e.message}")
    sys.exit(2)

orchestrator = ProvisioningOrchestrator(
    store=ConfigStore.from_env(),
    prompter=ConsolePrompter(),
    workdir=workdir,
)

ok = orchestrator.initialize(request)
attempt = orchestrator.attempt
print(f"Final state: {attempt.state.value}")
if ok:
    print(f"Remote: {attempt.remote_address}")
    print(f"Pushed branches: {', '.join(attempt.pushed_branches)}")
sys.exit(0 if ok else 1)
