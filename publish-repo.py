#!/usr/bin/env python3
"""
Publish Repo - Create a GitHub repository and push a local project to it.

The repository is created through the GitHub API under the authenticated
user or an organization, the local directory is initialized and committed
if needed, and the branch is pushed over HTTPS (token) or SSH (key).
"""

from __future__ import annotations

import sys
from typing import NoReturn

from chores import publish

# Exit codes
EXIT_EXECUTION_ERROR = 1


def main() -> NoReturn:
    if __name__ != "__main__":
        sys.exit(EXIT_EXECUTION_ERROR)

    sys.exit(publish())


if __name__ == "__main__":
    main()
