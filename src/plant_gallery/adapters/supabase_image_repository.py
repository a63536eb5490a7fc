"""Supabase-backed image repository."""

from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator

from plant_gallery.adapters.supabase_client import SupabaseClientHandle
from plant_gallery.domain.images import (
    DEFAULT_IMAGE_NAME,
    DEFAULT_USERNAME,
    ImageRecord,
)
from plant_gallery.services.gallery import ImageRepository


class ImageRow(BaseModel):
    """Row shape of the images table."""

    id: int
    image_src: str = Field(alias="imageSrc")
    name: str = DEFAULT_IMAGE_NAME
    username: str = DEFAULT_USERNAME

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: object) -> object:
        return value or DEFAULT_IMAGE_NAME

    @field_validator("username", mode="before")
    @classmethod
    def _default_username(cls, value: object) -> object:
        return value or DEFAULT_USERNAME

    def to_record(self) -> ImageRecord:
        return ImageRecord(
            id=self.id,
            image_src=self.image_src,
            name=self.name,
            username=self.username,
        )


@dataclass
class SupabaseImageRepository(ImageRepository):
    """Supabase implementation for gallery image persistence."""

    client: SupabaseClientHandle
    table_name: str = "images"

    def list_all_images(self) -> list[ImageRecord] | None:
        """Return every image ordered by id ascending."""
        response = self.client.table(self.table_name).select("*").order("id").execute()
        if response.data is None:
            return None
        return [ImageRow.model_validate(row).to_record() for row in response.data]

    def insert_image(self, record: ImageRecord) -> None:
        """Insert a single image row."""
        self.client.table(self.table_name).insert(record.to_row()).execute()
