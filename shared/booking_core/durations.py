from enum import Enum


class ServiceKind(str, Enum):
    SPA = "spa"
    CINEMA = "cinema"


TIERS = ("standard", "premium", "deluxe")

# Legacy package names still present on older rows.
PACKAGE_DURATIONS = {
    ServiceKind.SPA: {
        "1 Hour Session": 60,
        "1.5 Hour Session": 90,
        "2 Hour Premium Session": 120,
    },
    ServiceKind.CINEMA: {
        "Standard Experience": 180,
        "Premium Experience": 360,
        "Deluxe Experience": 720,  # overnight from 8pm
    },
}

TIER_PACKAGE_NAMES = {
    ServiceKind.SPA: {
        "standard": "1 Hour Session",
        "premium": "1.5 Hour Session",
        "deluxe": "2 Hour Premium Session",
    },
    ServiceKind.CINEMA: {
        "standard": "Standard Experience",
        "premium": "Premium Experience",
        "deluxe": "Deluxe Experience",
    },
}

DEFAULT_DURATIONS = {
    ServiceKind.SPA: 60,
    ServiceKind.CINEMA: 180,
}


def service_kind(service) -> ServiceKind:
    if isinstance(service, ServiceKind):
        return service
    return ServiceKind((service or "").strip().lower())


def norm_tier(value: str | None) -> str:
    return (value or "").strip().lower()


def tier_durations(service) -> dict[str, int]:
    kind = service_kind(service)
    packages = PACKAGE_DURATIONS[kind]
    return {tier: packages[name] for tier, name in TIER_PACKAGE_NAMES[kind].items()}


def duration_minutes(service, tier_or_package: str | None) -> int:
    """
    Session length for a tier id or a legacy package name.
    Unrecognised values resolve to the service default instead of raising,
    so one bad historical row cannot break a whole day's availability.
    """
    kind = service_kind(service)

    tier = norm_tier(tier_or_package)
    if tier in TIER_PACKAGE_NAMES[kind]:
        return PACKAGE_DURATIONS[kind][TIER_PACKAGE_NAMES[kind][tier]]

    package = (tier_or_package or "").strip()
    if package in PACKAGE_DURATIONS[kind]:
        return PACKAGE_DURATIONS[kind][package]

    return DEFAULT_DURATIONS[kind]


def resolve_booking_duration(service, experience_tier: str | None, package_type: str | None) -> int:
    if experience_tier:
        return duration_minutes(service, experience_tier)
    return duration_minutes(service, package_type)
