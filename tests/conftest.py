"""Shared test fixtures."""

import asyncio
import time
from collections.abc import Mapping
from dataclasses import dataclass, field

import pytest

from plant_gallery.config import Settings
from plant_gallery.containers import AppContainer
from plant_gallery.domain.images import ImageRecord
from plant_gallery.services.gallery import GalleryService, ImageRepository
from plant_gallery.services.sessions import GallerySessionService, GallerySessionStore
from plant_gallery.services.uploads import SubmitOutcome, UploadDialog


@dataclass
class InMemoryImageRepository(ImageRepository):
    """In-memory image repository for tests."""

    images: list[ImageRecord] | None = field(default_factory=list)
    inserted: list[ImageRecord] = field(default_factory=list)
    list_calls: int = 0
    fail_inserts: bool = False

    def list_all_images(self) -> list[ImageRecord] | None:
        self.list_calls += 1
        if self.images is None:
            return None
        return sorted(self.images, key=lambda image: image.id)

    def insert_image(self, record: ImageRecord) -> None:
        if self.fail_inserts:
            raise RuntimeError("store unavailable")
        self.inserted.append(record)


@dataclass
class SlowImageRepository(InMemoryImageRepository):
    """Image repository whose inserts take a while to finish."""

    delay_seconds: float = 0.2

    def insert_image(self, record: ImageRecord) -> None:
        time.sleep(self.delay_seconds)
        super().insert_image(record)


def run_submit(
    dialog: UploadDialog, data: Mapping[str, str | None]
) -> SubmitOutcome:
    return asyncio.run(dialog.submit(data))


def make_images(count: int) -> list[ImageRecord]:
    return [
        ImageRecord(
            id=index,
            image_src=f"https://images.unsplash.com/photo-{index}",
            name=f"plant {index}",
            username=f"user{index}",
        )
        for index in range(1, count + 1)
    ]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def image_repository() -> InMemoryImageRepository:
    return InMemoryImageRepository(images=make_images(3))


@pytest.fixture
def container(
    settings: Settings, image_repository: InMemoryImageRepository
) -> AppContainer:
    gallery_service = GalleryService(image_repository)
    session_service = GallerySessionService(
        gallery_service=gallery_service,
        store=GallerySessionStore(ttl_seconds=settings.session_ttl_seconds),
    )
    return AppContainer(
        settings=settings,
        gallery_service=gallery_service,
        session_service=session_service,
    )
