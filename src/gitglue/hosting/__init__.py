"""Code-hosting integrations (GitHub via the gh CLI)."""

from __future__ import annotations

from .github import ALREADY_EXISTS_PHRASES, GitHubCli, PullRequestStatus, is_already_exists

__all__ = ["ALREADY_EXISTS_PHRASES", "GitHubCli", "PullRequestStatus", "is_already_exists"]
