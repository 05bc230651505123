"""Append-only assistant conversation log."""

from collections.abc import Iterator

from .models import HistoryItem, Role, TranscriptEntry


class Transcript:
    """Chronological record of one assistant conversation.

    Entries are never mutated or removed once appended.
    """

    def __init__(self, greeting: str | None = None):
        """Initialize the transcript.

        Args:
            greeting: Optional assistant turn seeded as the first entry
        """
        self._entries: list[TranscriptEntry] = []
        if greeting:
            self.append(Role.ASSISTANT, greeting)

    def append(self, role: Role, content: str) -> TranscriptEntry:
        entry = TranscriptEntry(role=role, content=content)
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> tuple[TranscriptEntry, ...]:
        """Snapshot of all turns, oldest first."""
        return tuple(self._entries)

    def to_history(self) -> list[HistoryItem]:
        """Convert the transcript into request history.

        Assistant turns keep role "assistant"; every other turn is sent as
        role "user".
        """
        return [
            HistoryItem(
                role="assistant" if entry.role == Role.ASSISTANT else "user",
                content=entry.content,
            )
            for entry in self._entries
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TranscriptEntry]:
        return iter(self.entries)
