"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from guest_cards.adapters.image_fetcher import HttpxImageFetcher
from guest_cards.adapters.supabase_guest_repository import SupabaseGuestRepository
from guest_cards.adapters.supabase_image_store import SupabaseImageStore
from guest_cards.config import Settings
from guest_cards.services.compositor import CardCompositor
from guest_cards.services.guests import GuestRepository, GuestService
from guest_cards.services.startup import RetryPolicy


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    guest_repository: GuestRepository
    guest_service: GuestService
    retry_policy: RetryPolicy
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    compositor: CardCompositor | None = None,
) -> AppContainer:
    """Create the default dependency container.

    Loading the card assets happens here, so a missing template or font stops
    the process before it serves any request.
    """
    resolved_settings = settings or Settings()
    resolved_compositor = compositor or CardCompositor.load(
        template_path=resolved_settings.template_path,
        latin_font_path=resolved_settings.latin_font_path,
        arabic_font_path=resolved_settings.arabic_font_path,
        font_size=resolved_settings.font_size,
    )
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    guest_repository = SupabaseGuestRepository(
        supabase_client, table_name=resolved_settings.cards_table
    )
    image_store = SupabaseImageStore(
        supabase_client,
        bucket=resolved_settings.storage_bucket,
        signed_url_ttl=timedelta(days=resolved_settings.signed_url_ttl_days),
    )
    image_fetcher = HttpxImageFetcher.create()
    guest_service = GuestService(
        repository=guest_repository,
        image_store=image_store,
        image_fetcher=image_fetcher,
        compositor=resolved_compositor,
        storage_prefix=resolved_settings.storage_prefix,
    )
    retry_policy = RetryPolicy(
        interval_seconds=resolved_settings.db_retry_interval_seconds,
        max_attempts=resolved_settings.db_retry_max_attempts,
    )

    async def close_resources() -> None:
        await image_fetcher.close()

    return AppContainer(
        settings=resolved_settings,
        guest_repository=guest_repository,
        guest_service=guest_service,
        retry_policy=retry_policy,
        close_resources=close_resources,
    )
