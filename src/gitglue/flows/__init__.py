"""Branch workflows built on git and gh.

    - feature: create a feature branch from the remote trunk
    - publish: push the current branch and open a pull request
"""

from __future__ import annotations

from .feature import FeatureBranchOutcome, create_feature_branch
from .publish import PublishOutcome, publish_branch

__all__ = ["FeatureBranchOutcome", "PublishOutcome", "create_feature_branch", "publish_branch"]
