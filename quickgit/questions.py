"""Interactive collection of a provisioning request."""

from quickgit.config import ConfigStoreProtocol
from quickgit.prompts import Prompter
from quickgit.types.request import (
    Platform,
    ProvisioningRequest,
    Visibility,
    validate_description,
    validate_name,
)

DEFAULT_DESCRIPTION = "Created by Quick Git Advance"
DEFAULT_DEVELOP_BRANCH = "develop"


class RequestCollector:
    """Asks the basic and repository questions and builds the request."""

    def __init__(self, prompter: Prompter, store: ConfigStoreProtocol) -> None:
        self.prompter = prompter
        self.store = store

    def collect(self) -> ProvisioningRequest:
        name, platform = self.collect_basic_info()
        return self.collect_repo_info(name, platform)

    def collect_basic_info(self) -> tuple[str, Platform]:
        name = self.prompter.text("Repository name", validate=validate_name)
        platform = self.prompter.select(
            "Hosting platform",
            [(p.value, p.display_name) for p in Platform],
            default=Platform.GITHUB.value,
        )
        return name, Platform(platform)

    def collect_repo_info(self, name: str, platform: Platform) -> ProvisioningRequest:
        config = self.store.load()

        visibility = self.prompter.select(
            "Repository visibility",
            [(Visibility.PUBLIC.value, "Public"), (Visibility.PRIVATE.value, "Private")],
            default=config.default_visibility.value,
        )
        description = self.prompter.text(
            "Description", default=DEFAULT_DESCRIPTION, validate=validate_description
        )
        main_branch = self.prompter.text(
            "Main branch name",
            default=config.default_branch,
            validate=lambda value: validate_name(value, "Main branch name"),
        )
        need_dev_branch = self.prompter.confirm(
            "Create a separate development branch?", default=False
        )
        develop_branch = None
        if need_dev_branch:
            develop_branch = self.prompter.text(
                "Development branch name",
                default=DEFAULT_DEVELOP_BRANCH,
                validate=lambda value: validate_name(value, "Development branch name"),
            )

        return ProvisioningRequest(
            name=name,
            platform=platform,
            visibility=Visibility(visibility),
            description=description,
            main_branch=main_branch,
            develop_branch=develop_branch,
            need_dev_branch=need_dev_branch,
        )
