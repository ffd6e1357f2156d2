"""SSH pre-flight check against a provider host."""

import subprocess

from quickgit.logging import get_logger
from quickgit.types.request import Platform

logger = get_logger("ssh")

_SUCCESS_MARKERS = ("successfully authenticated", "Hi ")


def check_ssh_access(platform: Platform, timeout: float = 15.0) -> bool:
    """
    Try ``ssh -T git@<host>`` without any interaction.

    Providers close the session with a non-zero status even when the key is
    accepted, so success is judged from the greeting text.
    """
    host = Platform(platform).host
    cmd = [
        "ssh",
        "-T",
        "-o", "BatchMode=yes",
        "-o", "StrictHostKeyChecking=accept-new",
        "-o", "ConnectTimeout=10",
        f"git@{host}",
    ]

    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, timeout=timeout
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning(f"SSH check against {host} could not run: {e}")
        return False

    output = f"{result.stdout}\n{result.stderr}"
    ok = any(marker in output for marker in _SUCCESS_MARKERS)
    logger.debug(f"SSH check against {host}: {'ok' if ok else output.strip()}")
    return ok


def ssh_setup_guide(platform: Platform) -> str:
    """Short setup hint shown when the SSH check fails."""
    platform = Platform(platform)
    return (
        f"SSH access to {platform.host} does not seem to work.\n"
        "  1. Create a key:   ssh-keygen -t ed25519 -C \"you@example.com\"\n"
        "  2. Load it:        ssh-add ~/.ssh/id_ed25519\n"
        f"  3. Add the public key (~/.ssh/id_ed25519.pub) to your {platform.display_name} account\n"
        f"  4. Verify:        ssh -T git@{platform.host}"
    )
