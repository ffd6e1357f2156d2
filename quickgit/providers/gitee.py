"""Gitee gateway over the Gitee v5 API."""

from typing import Any

from quickgit.exceptions import NameConflict, ProviderError
from quickgit.logging import get_logger
from quickgit.providers.base import ProviderGateway
from quickgit.types.credentials import PlatformCredentials
from quickgit.types.repos import RemoteRepository
from quickgit.types.request import Platform, Visibility

logger = get_logger("providers.gitee")


class GiteeGateway(ProviderGateway):
    """
    Gateway for gitee.com.

    Gitee takes the access token as a body field on writes and as a query
    parameter on reads.
    """

    platform = Platform.GITEE
    DEFAULT_BASE_URL = "https://gitee.com/api/v5"

    def create_repository(
        self,
        name: str,
        visibility: Visibility,
        description: str,
        credentials: PlatformCredentials,
    ) -> RemoteRepository:
        body: dict[str, Any] = {
            "access_token": credentials.token,
            "name": name,
            "description": description,
            "private": Visibility(visibility).is_private,
            "auto_init": False,
        }

        try:
            data = self._transport.request_json("POST", "/user/repos", body=body)
        except NameConflict as e:
            raise NameConflict(
                "NAME_CONFLICT",
                f"Gitee rejected repository {name!r}: the name already exists "
                f"or contains special characters ({e.message})",
            ) from e

        ssh_url = data.get("ssh_url")
        if not ssh_url:
            raise ProviderError(
                "MALFORMED_RESPONSE",
                "Gitee created the repository but returned no ssh_url",
                platform=self.platform.value,
            )

        logger.info(f"Created Gitee repository {data.get('full_name', name)}")
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
            params={"access_token": credentials.token},
        )
