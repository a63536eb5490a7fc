"""Per-visitor gallery sessions."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from plant_gallery.services.gallery import GalleryService, GalleryView
from plant_gallery.services.uploads import UploadDialog


@dataclass
class GallerySession:
    """A gallery view together with the upload dialog mounted inside it."""

    id: str
    view: GalleryView
    dialog: UploadDialog


@dataclass
class _SessionEntry:
    session: GallerySession
    expires_at: datetime


@dataclass
class GallerySessionStore:
    """In-memory session store with a sliding TTL."""

    ttl_seconds: int
    _entries: dict[str, _SessionEntry] = field(default_factory=dict)

    def get(self, session_id: str) -> GallerySession | None:
        """Return a session if it hasn't expired, extending its lifetime."""
        entry = self._entries.get(session_id)
        if entry is None:
            return None
        now = datetime.now(tz=UTC)
        if now >= entry.expires_at:
            self._entries.pop(session_id, None)
            return None
        entry.expires_at = now + timedelta(seconds=self.ttl_seconds)
        return entry.session

    def set(self, session: GallerySession) -> None:
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=self.ttl_seconds)
        self._entries[session.id] = _SessionEntry(
            session=session, expires_at=expires_at
        )

    def prune(self) -> int:
        """Drop expired sessions and return how many were removed."""
        now = datetime.now(tz=UTC)
        expired = [
            key for key, entry in self._entries.items() if now >= entry.expires_at
        ]
        for key in expired:
            del self._entries[key]
        return len(expired)


@dataclass
class GallerySessionService:
    """Starts and looks up gallery sessions."""

    gallery_service: GalleryService
    store: GallerySessionStore

    def start_session(self) -> GallerySession:
        """Create a fresh session seeded from the gallery snapshot."""
        self.store.prune()
        view = self.gallery_service.new_view()
        dialog = UploadDialog(
            repository=self.gallery_service.repository,
            count_images=lambda: view.count,
            append_image=view.append_image,
        )
        session = GallerySession(id=str(uuid4()), view=view, dialog=dialog)
        self.store.set(session)
        return session

    def get_session(self, session_id: str) -> GallerySession | None:
        return self.store.get(session_id)
