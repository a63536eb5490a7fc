"""Upload dialog: form handling, gate check and optimistic append."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from fastapi.concurrency import run_in_threadpool

from plant_gallery.domain.dialog import (
    DialogState,
    DialogStateError,
    DialogTrigger,
    next_state,
)
from plant_gallery.domain.forms import UploadForm
from plant_gallery.domain.images import ImageRecord, new_image_record
from plant_gallery.services.gallery import ImageRepository

logger = logging.getLogger(__name__)

UPLOAD_KEY = "on"


class SubmitOutcome(StrEnum):
    """Result of a dialog submission."""

    INVALID = "invalid"
    REJECTED = "rejected"
    SAVED = "saved"


@dataclass
class UploadDialog:
    """Modal form that appends a new image to the gallery.

    ``count_images`` and ``append_image`` are supplied by the owning gallery
    view; the dialog never holds the image list itself.
    """

    repository: ImageRepository
    count_images: Callable[[], int]
    append_image: Callable[[ImageRecord], None]
    state: DialogState = DialogState.CLOSED
    form: UploadForm = field(default_factory=UploadForm)

    @property
    def is_open(self) -> bool:
        return self.state is DialogState.OPEN

    def open(self) -> None:
        self._apply(DialogTrigger.OPEN)

    def close(self) -> None:
        self._apply(DialogTrigger.CLOSE)
        self.form.reset()

    async def submit(self, data: Mapping[str, str | None]) -> SubmitOutcome:
        """Validate, gate, persist and append a new image.

        The store insert runs in a worker thread. The dialog stays open while it
        is in flight, so a second submit can start and append as well.
        """
        if not self.is_open:
            raise DialogStateError("Cannot submit while the dialog is closed")
        self.form.bind(data)
        if self.form.validate():
            return SubmitOutcome.INVALID

        if self.form.value("key") != UPLOAD_KEY:
            self._apply(DialogTrigger.GATE_REJECTED)
            self.form.reset()
            return SubmitOutcome.REJECTED

        record = new_image_record(
            amount=self.count_images(),
            image_src=self.form.value("imageSrc"),
            name=self.form.value("name"),
            username=self.form.value("username"),
        )
        try:
            await run_in_threadpool(self.repository.insert_image, record)
        except Exception:
            logger.exception("Failed to insert image", extra={"image_id": record.id})
        else:
            logger.info("Inserted image %d", record.id)
        self.append_image(record)
        if self.is_open:
            self._apply(DialogTrigger.SUBMITTED)
        self.form.reset()
        return SubmitOutcome.SAVED

    def _apply(self, trigger: DialogTrigger) -> None:
        self.state = next_state(self.state, trigger)
