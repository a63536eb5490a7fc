"""Domain models for gallery images."""

from dataclasses import dataclass

DEFAULT_IMAGE_NAME = "plant from anonymous"
DEFAULT_USERNAME = "anonymous"


@dataclass(frozen=True)
class ImageRecord:
    """Represents one gallery image stored in the database."""

    id: int
    image_src: str
    name: str = DEFAULT_IMAGE_NAME
    username: str = DEFAULT_USERNAME

    def to_row(self) -> dict[str, object]:
        """Return the store row for this record."""
        return {
            "id": self.id,
            "imageSrc": self.image_src,
            "name": self.name,
            "username": self.username,
        }


def new_image_record(
    amount: int, image_src: str, name: str | None, username: str | None
) -> ImageRecord:
    """Build the next record from the current image count.

    Ids come from the local count, so two sessions can hand out the same id.
    """
    return ImageRecord(
        id=amount + 1,
        image_src=image_src,
        name=name or DEFAULT_IMAGE_NAME,
        username=username or DEFAULT_USERNAME,
    )
