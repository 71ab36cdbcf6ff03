#!/usr/bin/env python3
"""Entry points for the github-chores command line tools."""

from __future__ import annotations

from typing import Optional, Sequence

from argument_parser import parse_clone_arguments, parse_publish_arguments
from clone_orchestrator import CloneOrchestrator
from publish_orchestrator import PublishOrchestrator


def clone_all(argv: Optional[Sequence[str]] = None) -> int:
    cfg = parse_clone_arguments(argv)
    return CloneOrchestrator(cfg).run()


def publish(argv: Optional[Sequence[str]] = None) -> int:
    cfg = parse_publish_arguments(argv)
    return PublishOrchestrator(cfg).run()
