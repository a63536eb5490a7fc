"""Tests for the upload dialog submission flow."""

import asyncio
import logging

import pytest

from plant_gallery.domain.dialog import DialogState, DialogStateError
from plant_gallery.domain.forms import IMAGE_LINK_MESSAGE
from plant_gallery.services.gallery import GalleryView
from plant_gallery.services.uploads import SubmitOutcome, UploadDialog
from tests.conftest import (
    InMemoryImageRepository,
    SlowImageRepository,
    make_images,
    run_submit,
)

VALID_SRC = "https://images.unsplash.com/photo-1485955900006-10f4d324d411"


def _dialog(
    view: GalleryView, repository: InMemoryImageRepository
) -> UploadDialog:
    return UploadDialog(
        repository=repository,
        count_images=lambda: view.count,
        append_image=view.append_image,
    )


def test_accepted_submission_appends_defaulted_record() -> None:
    repository = InMemoryImageRepository()
    view = GalleryView.seeded(make_images(3))
    dialog = _dialog(view, repository)
    dialog.open()

    outcome = run_submit(
        dialog,
        {"imageSrc": VALID_SRC, "name": "", "username": "", "key": "on"},
    )

    assert outcome is SubmitOutcome.SAVED
    appended = view.images[-1]
    assert appended.id == 4
    assert appended.image_src == VALID_SRC
    assert appended.name == "plant from anonymous"
    assert appended.username == "anonymous"
    assert repository.inserted == [appended]
    assert dialog.state is DialogState.CLOSED


def test_accepted_submission_keeps_given_name_and_username() -> None:
    view = GalleryView.seeded([])
    dialog = _dialog(view, InMemoryImageRepository())
    dialog.open()

    run_submit(
        dialog,
        {"imageSrc": VALID_SRC, "name": "Monstera", "username": "ana", "key": "on"},
    )

    assert view.images[0].name == "Monstera"
    assert view.images[0].username == "ana"
    assert view.images[0].id == 1


def test_wrong_key_closes_silently_without_creating() -> None:
    repository = InMemoryImageRepository()
    view = GalleryView.seeded(make_images(2))
    dialog = _dialog(view, repository)
    dialog.open()

    outcome = run_submit(
        dialog,
        {"imageSrc": VALID_SRC, "name": "Fern", "username": "bo", "key": "off"}
    )

    assert outcome is SubmitOutcome.REJECTED
    assert dialog.state is DialogState.CLOSED
    assert view.count == 2
    assert repository.inserted == []
    assert dialog.form.errors == {}
    assert all(field.value == "" for field in dialog.form.fields.values())


def test_invalid_image_link_blocks_submission() -> None:
    repository = InMemoryImageRepository()
    view = GalleryView.seeded(make_images(2))
    dialog = _dialog(view, repository)
    dialog.open()

    outcome = run_submit(
        dialog,
        {"imageSrc": "not a url", "name": "", "username": "", "key": "on"},
    )

    assert outcome is SubmitOutcome.INVALID
    assert dialog.state is DialogState.OPEN
    assert dialog.form.errors == {"imageSrc": IMAGE_LINK_MESSAGE}
    assert dialog.form.value("imageSrc") == "not a url"
    assert view.count == 2
    assert repository.inserted == []


def test_missing_key_blocks_submission_before_gate() -> None:
    view = GalleryView.seeded([])
    dialog = _dialog(view, InMemoryImageRepository())
    dialog.open()

    outcome = run_submit(dialog, {"imageSrc": VALID_SRC})

    assert outcome is SubmitOutcome.INVALID
    assert "key" in dialog.form.errors
    assert dialog.is_open


def test_sequential_submissions_get_consecutive_ids() -> None:
    view = GalleryView.seeded(make_images(5))
    dialog = _dialog(view, InMemoryImageRepository())

    for src in ("https://a.example.com/1.png", "https://b.example.com/2.png"):
        dialog.open()
        run_submit(dialog, {"imageSrc": src, "key": "on"})

    assert [image.id for image in view.images[-2:]] == [6, 7]
    assert [tile.record.image_src for tile in view.tiles[-2:]] == [
        "https://a.example.com/1.png",
        "https://b.example.com/2.png",
    ]


def test_store_failure_still_appends_locally(caplog) -> None:
    repository = InMemoryImageRepository(fail_inserts=True)
    view = GalleryView.seeded(make_images(1))
    dialog = _dialog(view, repository)
    dialog.open()

    logger = logging.getLogger("plant_gallery")
    logger.addHandler(caplog.handler)
    try:
        outcome = run_submit(dialog, {"imageSrc": VALID_SRC, "key": "on"})
    finally:
        logger.removeHandler(caplog.handler)

    assert outcome is SubmitOutcome.SAVED
    assert view.count == 2
    assert repository.inserted == []
    assert "Failed to insert image" in caplog.text


def test_sessions_from_same_snapshot_assign_colliding_ids() -> None:
    # Known limitation: ids come from the local count, not the store.
    repository = InMemoryImageRepository()
    snapshot = make_images(3)
    first_view = GalleryView.seeded(snapshot)
    second_view = GalleryView.seeded(snapshot)

    for view in (first_view, second_view):
        dialog = _dialog(view, repository)
        dialog.open()
        run_submit(dialog, {"imageSrc": VALID_SRC, "key": "on"})

    assert [record.id for record in repository.inserted] == [4, 4]


def test_submit_requires_open_dialog() -> None:
    dialog = _dialog(GalleryView.seeded([]), InMemoryImageRepository())

    with pytest.raises(DialogStateError):
        run_submit(dialog, {"imageSrc": VALID_SRC, "key": "on"})


def test_close_discards_entered_values() -> None:
    dialog = _dialog(GalleryView.seeded([]), InMemoryImageRepository())
    dialog.open()
    run_submit(dialog, {"imageSrc": "not a url", "name": "Fern", "key": "on"})

    dialog.close()

    assert dialog.state is DialogState.CLOSED
    assert dialog.form.value("name") == ""
    assert dialog.form.errors == {}


def test_submit_during_pending_insert_also_appends() -> None:
    repository = SlowImageRepository()
    view = GalleryView.seeded(make_images(3))
    dialog = _dialog(view, repository)
    dialog.open()

    async def submit_twice() -> list[SubmitOutcome]:
        return await asyncio.gather(
            dialog.submit({"imageSrc": "https://a.example.com/1.png", "key": "on"}),
            dialog.submit({"imageSrc": "https://b.example.com/2.png", "key": "on"}),
        )

    outcomes = asyncio.run(submit_twice())

    assert outcomes == [SubmitOutcome.SAVED, SubmitOutcome.SAVED]
    assert [image.id for image in view.images[-2:]] == [4, 4]
    assert sorted(record.image_src for record in repository.inserted) == [
        "https://a.example.com/1.png",
        "https://b.example.com/2.png",
    ]
    assert dialog.state is DialogState.CLOSED
