"""Value objects passed between the pipeline stages."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class LocalRecord:
    """An original file and its raw EXIF capture time."""
    name: str
    path: Path
    captured_at: str


@dataclass(frozen=True)
class RemoteRecord:
    """A photo in the remote set."""
    id: str
    title: str
    captured_at: str

    @classmethod
    def from_api(cls, photo: Dict[str, Any]) -> 'RemoteRecord':
        return cls(
            id=str(photo['id']),
            title=photo.get('title', ''),
            captured_at=photo.get('datetaken', ''),
        )


@dataclass(frozen=True)
class PhotosetListing:
    """First page of a photo set as returned by the listing service."""
    id: str
    title: str
    total: int
    per_page: int
    photos: List[RemoteRecord] = field(default_factory=list)

    @property
    def truncated(self) -> bool:
        return self.total > self.per_page


@dataclass(frozen=True)
class MatchResult:
    local: LocalRecord
    remote: Optional[RemoteRecord] = None

    @property
    def matched(self) -> bool:
        return self.remote is not None


@dataclass(frozen=True)
class ReconciliationResult:
    matches: List[MatchResult]
    unmatched: List[LocalRecord]


@dataclass(frozen=True)
class RenamePlan:
    source: Path
    target: Path
    remote_id: str
    title: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'from': str(self.source),
            'to': str(self.target),
            'remote_id': self.remote_id,
            'title': self.title,
        }


@dataclass(frozen=True)
class RenameOutcome:
    """Result of applying (or dry-running) a single plan."""
    RENAMED = 'renamed'
    DRY_RUN = 'dry_run'
    UNCHANGED = 'unchanged'
    FAILED = 'failed'

    plan: RenamePlan
    status: str
    error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.status == self.FAILED

    def to_dict(self) -> Dict[str, Any]:
        entry = self.plan.to_dict()
        entry['status'] = self.status
        if self.error is not None:
            entry['error'] = str(self.error)
        return entry
