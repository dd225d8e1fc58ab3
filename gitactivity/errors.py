# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Exceptions raised while building an activity report."""

from enum import Enum
from typing import Optional


class GitActivityError(Exception):
    """Base exception for report failures."""


class TransportError(GitActivityError):
    """Raised by the GraphQL client for network, auth or malformed response failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RemoteQueryError(GitActivityError):
    """A transport failure annotated with the query, page and repository that were in flight."""

    def __init__(
        self,
        message: str,
        query_name: str,
        repository: Optional[str] = None,
        page: Optional[int] = None,
        cursor: Optional[str] = None,
    ):
        super().__init__(message)
        self.query_name = query_name
        self.repository = repository
        self.page = page
        self.cursor = cursor

    def __str__(self) -> str:
        context = [f"query={self.query_name}"]
        if self.repository:
            context.append(f"repository={self.repository}")
        if self.page is not None:
            context.append(f"page={self.page}")
        if self.cursor:
            context.append(f"cursor={self.cursor}")
        return f"{super().__str__()} ({', '.join(context)})"


class RunPhase(Enum):
    """Phase of a run in which a failure happened"""

    LISTING = "repositories listing"
    REPORT = "report"


class RunError(GitActivityError):
    """Top-level failure of ActivityReport.run(), wrapping the first error encountered."""

    def __init__(self, message: str, phase: RunPhase, repository: Optional[str] = None):
        super().__init__(message)
        self.phase = phase
        self.repository = repository

    @classmethod
    def from_error(cls, error: Exception, phase: RunPhase, repository: Optional[str] = None) -> 'RunError':
        if phase == RunPhase.REPORT and repository:
            message = f"An error occurred during report for {repository}: {error}"
        else:
            message = f"An error occurred during {phase.value}: {error}"
        return cls(message, phase=phase, repository=repository)
