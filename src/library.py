"""In-memory resume library: saved drafts with a frozen score, filterable by tag."""

import uuid
from dataclasses import asdict, dataclass
from datetime import datetime

from src.errors import InvalidIndex
from src.fields import DraftFields
from src.utils import locale_timestamp


@dataclass(frozen=True)
class LibraryEntry:
    """Snapshot of a saved draft. The score is fixed when the entry is created."""

    id: str
    title: str
    tag: str
    content: str
    timestamp: str
    score: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Library:
    """Ordered, insertion-order collection of entries. Every operation returns a new Library."""

    entries: tuple[LibraryEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def to_list(self) -> list[dict]:
        return [e.to_dict() for e in self.entries]


def _new_entry_id(existing: set[str]) -> str:
    while True:
        entry_id = str(uuid.uuid4())[:8]
        if entry_id not in existing:
            return entry_id


def save(
    library: Library,
    fields: DraftFields,
    draft: str,
    score: int,
    now: datetime | None = None,
) -> Library:
    """Append a snapshot of draft + fields. Never deduplicates."""
    timestamp = locale_timestamp(now)
    entry = LibraryEntry(
        id=_new_entry_id({e.id for e in library.entries}),
        title=f"{fields.job_title} Resume ({timestamp})",
        tag=fields.job_type,
        content=draft,
        timestamp=timestamp,
        score=score,
    )
    return Library(entries=library.entries + (entry,))


def get(library: Library, entry_id: str) -> LibraryEntry:
    """Look up an entry by id. Raises InvalidIndex if it is not in the library."""
    for entry in library.entries:
        if entry.id == entry_id:
            return entry
    raise InvalidIndex(entry_id)


def remove(library: Library, entry_id: str) -> Library:
    """Remove the entry with this id, keeping the order of the rest."""
    get(library, entry_id)
    return Library(entries=tuple(e for e in library.entries if e.id != entry_id))


def find(library: Library, tag_query: str | None) -> list[LibraryEntry]:
    """Case-insensitive substring match on tag. Empty query returns every entry."""
    if not tag_query:
        return list(library.entries)
    needle = tag_query.lower()
    return [e for e in library.entries if needle in e.tag.lower()]


def load(entry: LibraryEntry) -> str:
    """Content to install as the live draft, unmodified."""
    return entry.content
