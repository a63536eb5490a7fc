"""Dependency container wiring for the application."""

from dataclasses import dataclass

from plant_gallery.adapters.supabase_client import SupabaseClientHandle
from plant_gallery.adapters.supabase_image_repository import SupabaseImageRepository
from plant_gallery.config import Settings
from plant_gallery.services.gallery import GalleryService
from plant_gallery.services.sessions import GallerySessionService, GallerySessionStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    gallery_service: GalleryService
    session_service: GallerySessionService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = SupabaseClientHandle(
        url=resolved_settings.supabase_url, key=resolved_settings.supabase_service_key
    )
    image_repository = SupabaseImageRepository(
        supabase_client, table_name=resolved_settings.images_table
    )
    gallery_service = GalleryService(image_repository)
    session_service = GallerySessionService(
        gallery_service=gallery_service,
        store=GallerySessionStore(ttl_seconds=resolved_settings.session_ttl_seconds),
    )
    return AppContainer(
        settings=resolved_settings,
        gallery_service=gallery_service,
        session_service=session_service,
    )
