"""Models package."""

from .issue_preference import UserIssuePreference
