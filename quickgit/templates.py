"""Baseline files written into a new repository."""

from typing import Protocol

GITIGNORE_FILENAME = ".gitignore"

DEFAULT_GITIGNORE = """# Dependencies
/node_modules
/.pnp
.pnp.js

# Python
__pycache__/
*.py[cod]
.venv/

# Testing
/coverage

# Production
/build
/dist

# Misc
.DS_Store
.env.local
.env.development.local
.env.test.local
.env.production.local

# Logs
npm-debug.log*
yarn-debug.log*
yarn-error.log*

# Editor
.idea/
.vscode/
*.swp
*.swo

# OS generated files
.DS_Store?
._*
.Spotlight-V100
.Trashes
ehthumbs.db
Thumbs.db
"""


class IgnoreTemplate(Protocol):
    """Supplies the content of the baseline ignore file."""

    def __call__(self) -> str: ...


def default_gitignore() -> str:
    return DEFAULT_GITIGNORE
