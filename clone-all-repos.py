#!/usr/bin/env python3
"""
Clone All Repos - Bulk-clone every public repository of a GitHub user or
organization.

The repository list is fetched page by page from the GitHub API, then each
repository is cloned into the target directory. Repositories that already
exist locally are skipped, so an interrupted run can simply be repeated.
"""

from __future__ import annotations

import sys
from typing import NoReturn

from chores import clone_all

# Exit codes
EXIT_EXECUTION_ERROR = 1


def main() -> NoReturn:
    if __name__ != "__main__":
        sys.exit(EXIT_EXECUTION_ERROR)

    sys.exit(clone_all())


if __name__ == "__main__":
    main()
