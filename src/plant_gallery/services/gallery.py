"""Gallery view state and the image store interface."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from plant_gallery.domain.images import ImageRecord

logger = logging.getLogger(__name__)


class ImageRepository(Protocol):
    """Persistence interface for gallery images."""

    def list_all_images(self) -> list[ImageRecord] | None:
        """Return every image ordered by id, or None when the store has no data."""

    def insert_image(self, record: ImageRecord) -> None:
        """Insert a single image record."""


@dataclass
class ImageTile:
    """Render state for one gallery tile.

    ``loading`` is the state the tile is first rendered in. In the browser the
    flip happens on the image load event; ``mark_loaded`` is the same
    transition for server-side callers.
    """

    record: ImageRecord
    loading: bool = True

    def mark_loaded(self) -> None:
        """Flip the loading flag once the image has loaded."""
        if self.loading:
            self.loading = False


@dataclass
class GalleryView:
    """Session-owned list of images shown in the grid.

    ``images`` is None when the initial load returned nothing at all, which
    renders the "not found" fallback instead of a grid.
    """

    images: list[ImageRecord] | None
    tiles: list[ImageTile] = field(init=False)

    def __post_init__(self) -> None:
        self.tiles = [ImageTile(record) for record in self.images or []]

    @classmethod
    def seeded(cls, initial: Sequence[ImageRecord] | None) -> "GalleryView":
        """Create a view holding its own copy of the initial images."""
        return cls(images=None if initial is None else list(initial))

    @property
    def found(self) -> bool:
        return self.images is not None

    @property
    def count(self) -> int:
        return len(self.images) if self.images is not None else 0

    def append_image(self, record: ImageRecord) -> None:
        """Append a record after the existing ones, without re-sorting."""
        if self.images is None:
            self.images = []
        self.images.append(record)
        self.tiles.append(ImageTile(record))


@dataclass
class GalleryService:
    """Loads the gallery snapshot once and hands out fresh views."""

    repository: ImageRepository
    _snapshot: list[ImageRecord] | None = field(default=None, init=False)
    _loaded: bool = field(default=False, init=False)

    def initial_images(self) -> list[ImageRecord] | None:
        """Return the load-time image list, fetching it on first use."""
        if not self._loaded:
            self._snapshot = self.repository.list_all_images()
            self._loaded = True
            if self._snapshot is None:
                logger.warning("Image store returned no data")
            else:
                logger.info("Loaded %d gallery images", len(self._snapshot))
        return self._snapshot

    def new_view(self) -> GalleryView:
        """Create a view seeded from the snapshot."""
        return GalleryView.seeded(self.initial_images())
