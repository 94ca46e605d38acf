from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from venue_booking.core.config import settings
from venue_booking.core.logging_config import configure_logging
from venue_booking.application.ports.booking_store import BookingStorePort
from venue_booking.application.ports.dish_catalog import DishCatalogPort
from venue_booking.application.use_cases.booking import BookingUseCase
from venue_booking.application.use_cases.catering import CateringUseCase
from venue_booking.infrastructure.catalog.dish_catalog_store import DishCatalogStore
from venue_booking.infrastructure.store.memory_store import MemoryBookingStore


_booking_store: MemoryBookingStore | None = None


def get_booking_store() -> BookingStorePort:
    global _booking_store
    if _booking_store is None:
        _booking_store = MemoryBookingStore()
    return _booking_store


@lru_cache
def get_dish_catalog() -> DishCatalogPort:
    return DishCatalogStore()


def get_booking_use_case() -> BookingUseCase:
    return BookingUseCase(
        store=get_booking_store(),
        timezone=ZoneInfo(settings.BOOKING_TIMEZONE),
        base_hours=settings.BASE_DURATION_HOURS,
        max_additional_hours=settings.MAX_ADDITIONAL_HOURS,
        min_lead_days=settings.MIN_LEAD_DAYS,
        conflict_policy=settings.APPROVAL_CONFLICT_POLICY.lower(),
    )


def get_catering_use_case() -> CateringUseCase:
    return CateringUseCase(
        store=get_booking_store(),
        catalog=get_dish_catalog(),
        default_max_dishes=settings.MAX_DISHES,
    )


def get_container() -> dict[str, object]:
    configure_logging(settings.LOG_LEVEL)
    logger = logging.getLogger(__name__)
    logger.info("ENV=%s timezone=%s", settings.ENV, settings.BOOKING_TIMEZONE)
    return {
        "booking": get_booking_use_case(),
        "catering": get_catering_use_case(),
        "store": get_booking_store(),
    }
