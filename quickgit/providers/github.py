"""GitHub gateway over the GitHub REST API."""

from typing import Any

from quickgit.exceptions import NameConflict, ProviderError
from quickgit.logging import get_logger
from quickgit.providers.base import ProviderGateway
from quickgit.types.credentials import PlatformCredentials
from quickgit.types.repos import RemoteRepository
from quickgit.types.request import Platform, Visibility

logger = get_logger("providers.github")


class GitHubGateway(ProviderGateway):
    """Gateway for github.com (or a GitHub Enterprise API via ``base_url``)."""

    platform = Platform.GITHUB
    DEFAULT_BASE_URL = "https://api.github.com"

    def default_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def create_repository(
        self,
        name: str,
        visibility: Visibility,
        description: str,
        credentials: PlatformCredentials,
    ) -> RemoteRepository:
        body: dict[str, Any] = {
            "name": name,
            "description": description,
            "private": Visibility(visibility).is_private,
            "auto_init": False,
        }

        try:
            data = self._transport.request_json(
                "POST", "/user/repos", body=body, headers=_auth(credentials)
            )
        except NameConflict as e:
            # GitHub answers 422 for invalid names too
            if "already exists" not in e.message:
                raise ProviderError(
                    "INVALID_REPOSITORY",
                    f"GitHub rejected repository {name!r}: {e.message}",
                    status_code=422,
                    platform=self.platform.value,
                ) from e
            raise NameConflict(
                "NAME_CONFLICT", f"GitHub repository {name!r} already exists"
            ) from e

        ssh_url = data.get("ssh_url")
        if not ssh_url:
            raise ProviderError(
                "MALFORMED_RESPONSE",
                "GitHub created the repository but returned no ssh_url",
                platform=self.platform.value,
            )

        logger.info(f"Created GitHub repository {data.get('full_name', name)}")
        return RemoteRepository(
            name=data.get("name", name),
            platform=self.platform,
            visibility=Visibility(visibility),
            description=description,
            ssh_url=ssh_url,
            html_url=data.get("html_url"),
        )

    def get_repository(self, name: str, credentials: PlatformCredentials) -> dict[str, Any]:
        return self._transport.request_json(
            "GET",
            f"/repos/{credentials.username}/{name}",
            headers=_auth(credentials),
        )


def _auth(credentials: PlatformCredentials) -> dict[str, str]:
    return {"Authorization": f"Bearer {credentials.token}"}
