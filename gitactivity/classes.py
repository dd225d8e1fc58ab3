# The MIT License (MIT)
# Copyright © 2025 Entrius

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class PRState(Enum):
    """PR state as reported by GitHub"""

    MERGED = "MERGED"
    OPEN = "OPEN"
    CLOSED = "CLOSED"


@dataclass(frozen=True)
class PageInfo:
    """Pagination metadata returned with every GraphQL connection"""

    has_next_page: bool = False
    end_cursor: str = ''
    start_cursor: str = ''
    has_previous_page: bool = False

    @classmethod
    def from_graphql_response(cls, data: Optional[Dict[str, Any]]) -> 'PageInfo':
        data = data or {}
        return cls(
            has_next_page=bool(data.get('hasNextPage')),
            end_cursor=data.get('endCursor') or '',
            start_cursor=data.get('startCursor') or '',
            has_previous_page=bool(data.get('hasPreviousPage')),
        )


@dataclass(frozen=True)
class RateLimitSnapshot:
    """GraphQL rateLimit block attached to a response. Advisory only."""

    limit: int
    cost: int
    remaining: int
    reset_at: str

    @classmethod
    def from_graphql_response(cls, data: Optional[Dict[str, Any]]) -> Optional['RateLimitSnapshot']:
        if not data:
            return None
        return cls(
            limit=data.get('limit', 0),
            cost=data.get('cost', 0),
            remaining=data.get('remaining', 0),
            reset_at=data.get('resetAt') or '',
        )

    def __str__(self) -> str:
        return f"RateLimit(remaining={self.remaining}/{self.limit}, cost={self.cost}, resets_at={self.reset_at})"


@dataclass(frozen=True)
class User:
    """Participant or commit author"""

    login: str


@dataclass
class PullRequest:
    """A pull request as used by the activity report.

    ``repository`` is not part of the GraphQL node; the fetcher stamps it right
    after the response is mapped. Timestamps stay as the raw ISO strings
    returned by GitHub so unparseable values survive until classification.
    """

    number: int
    title: str
    created_at: str
    state: PRState
    merged_at: str = ''
    repository: str = ''
    participant_count: int = 0
    activity_event_count: int = 0
    participants: List[User] = field(default_factory=list)

    @classmethod
    def from_graphql_response(cls, pr_data: Dict[str, Any], default_state: PRState = PRState.OPEN) -> 'PullRequest':
        participants = pr_data.get('participants') or {}
        timeline = pr_data.get('timeline') or {}
        state = pr_data.get('state')

        return cls(
            number=pr_data['number'],
            title=pr_data.get('title') or '',
            created_at=pr_data.get('createdAt') or '',
            merged_at=pr_data.get('mergedAt') or '',
            state=PRState(state) if state else default_state,
            participant_count=participants.get('totalCount', 0),
            activity_event_count=timeline.get('totalCount', 0),
            participants=[User(login=node['login']) for node in participants.get('nodes') or [] if node],
        )


@dataclass(frozen=True)
class CommitRecord:
    """Single commit on a branch"""

    oid: str
    committed_date: str
    author_name: str
    message: str

    @classmethod
    def from_graphql_response(cls, commit_data: Dict[str, Any]) -> 'CommitRecord':
        author = commit_data.get('author') or {}
        return cls(
            oid=commit_data.get('oid', ''),
            committed_date=commit_data.get('committedDate', ''),
            author_name=author.get('name') or '',
            message=commit_data.get('message', ''),
        )


@dataclass
class BranchHistory:
    """Commits on one branch since the cutoff"""

    name: str
    commits: List[CommitRecord] = field(default_factory=list)
    total_count: int = 0

    @classmethod
    def from_graphql_response(cls, ref_data: Dict[str, Any]) -> 'BranchHistory':
        # target is a Commit for branch refs; annotated tags etc. come back empty
        history = (ref_data.get('target') or {}).get('history') or {}
        return cls(
            name=ref_data.get('name', ''),
            commits=[CommitRecord.from_graphql_response(c) for c in history.get('nodes') or [] if c],
            total_count=history.get('totalCount', 0),
        )


@dataclass
class RawRepoReport:
    """Typed result of the single combined query issued per repository."""

    name: str
    merged_prs: List[PullRequest] = field(default_factory=list)
    open_prs: List[PullRequest] = field(default_factory=list)
    branches: List[BranchHistory] = field(default_factory=list)
    merged_total_count: int = 0
    open_total_count: int = 0
    rate_limit: Optional[RateLimitSnapshot] = None

    @property
    def truncated(self) -> bool:
        """True when GitHub holds more merged or open PRs than a single page returned."""
        return self.merged_total_count > len(self.merged_prs) or self.open_total_count > len(self.open_prs)


@dataclass
class ActivityResult:
    """The three PR buckets of a report"""

    merged_prs: List[PullRequest] = field(default_factory=list)
    open_prs_with_activity: List[PullRequest] = field(default_factory=list)
    open_prs_without_activity: List[PullRequest] = field(default_factory=list)
