"""
Issue Store adapter layer.

The workflow core talks to an issue tracker only through the async
``IssueStore`` contract defined in ``models``; ``GitHubIssueStore`` is the
production implementation.
"""

from .github_adapter import GitHubIssueStore
from .models import Comment, Issue, IssueState, IssueStore, ListState

__all__ = ["Issue", "Comment", "IssueStore", "IssueState", "ListState", "GitHubIssueStore"]
