"""Notes - append/remove-only annotations owned by exactly one aggregate.

Invariants:
    - A note is immutable once created; it can only be removed, never edited
    - Note content is non-empty (REQUIRED otherwise)
    - Note ids are unique within their owner; removing an unknown id is NOT_FOUND
      and leaves the note list untouched
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from farm_assets.core.domain_types import NoteId
from farm_assets.core.errors import EntityNotFoundError
from farm_assets.core.validators import validate_note_content


@dataclass(frozen=True)
class Note:
    id: NoteId
    content: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class NoteOwner:
    """Note behaviour shared by Reservoir and Area. The host dataclass declares `notes`."""

    notes: list[Note]

    def add_note(self, content: str) -> Note:
        """Append a note and return it."""
        text = validate_note_content(content)
        taken = {note.id for note in self.notes}
        note_id = NoteId(uuid.uuid4())
        while note_id in taken:
            note_id = NoteId(uuid.uuid4())
        note = Note(id=note_id, content=text)
        self.notes.append(note)
        return note

    def find_note(self, note_id: NoteId | str) -> Note | None:
        wanted = str(note_id)
        for note in self.notes:
            if str(note.id) == wanted:
                return note
        return None

    def remove_note(self, note_id: NoteId | str) -> Note:
        """Remove a note by id and return it. NOT_FOUND if absent."""
        note = self.find_note(note_id)
        if note is None:
            raise EntityNotFoundError("note", note_id)
        self.notes = [n for n in self.notes if n.id != note.id]
        return note
