from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .durations import DEFAULT_DURATIONS, PACKAGE_DURATIONS, ServiceKind, service_kind, tier_durations, norm_tier
from .errors import InvalidSlotLabel, PriceMismatch
from .intervals import parse_slot_label

DEFAULT_CLEANING_GAP_MINUTES = 30


@dataclass(frozen=True)
class ServiceCatalogue:
    service: ServiceKind
    slot_labels: tuple[str, ...]
    tier_durations: Mapping[str, int] = field(default_factory=dict)
    tier_prices: Mapping[str, float] = field(default_factory=dict)
    cleaning_gap_minutes: int = DEFAULT_CLEANING_GAP_MINUTES

    def __post_init__(self):
        # read-only views so a shared catalogue cannot be edited at runtime
        object.__setattr__(self, "tier_durations", MappingProxyType({norm_tier(k): v for k, v in self.tier_durations.items()}))
        object.__setattr__(self, "tier_prices", MappingProxyType({norm_tier(k): v for k, v in self.tier_prices.items()}))

        if not self.slot_labels:
            raise ValueError(f"{self.service.value} catalogue has no slots")
        if len(set(self.slot_labels)) != len(self.slot_labels):
            raise ValueError(f"{self.service.value} catalogue has duplicate slots")
        for label in self.slot_labels:
            parse_slot_label(label)
        if any(minutes < 0 for minutes in self.tier_durations.values()):
            raise ValueError("tier durations must be non-negative")
        if self.cleaning_gap_minutes < 0:
            raise ValueError("cleaning gap must be non-negative")

    def has_slot(self, label: str) -> bool:
        return label in self.slot_labels

    def require_slot(self, label: str) -> str:
        if label not in self.slot_labels:
            raise InvalidSlotLabel(label)
        return label

    def duration_for(self, tier_or_package: str | None) -> int:
        """
        This catalogue's tier table first, then legacy package names, then
        the service default. Never raises for an unknown value.
        """
        tier = norm_tier(tier_or_package)
        if tier in self.tier_durations:
            return self.tier_durations[tier]

        package = (tier_or_package or "").strip()
        if package in PACKAGE_DURATIONS[self.service]:
            return PACKAGE_DURATIONS[self.service][package]

        return DEFAULT_DURATIONS[self.service]

    def check_price(self, tier: str, price) -> None:
        tier = norm_tier(tier)
        expected = self.tier_prices.get(tier)
        if expected is None:
            raise PriceMismatch(f"Unknown experience tier: {tier!r}")
        if float(price) != float(expected):
            raise PriceMismatch("Price does not match experience tier")

    def with_cleaning_gap(self, minutes: int) -> "ServiceCatalogue":
        return ServiceCatalogue(
            service=self.service,
            slot_labels=self.slot_labels,
            tier_durations=dict(self.tier_durations),
            tier_prices=dict(self.tier_prices),
            cleaning_gap_minutes=minutes,
        )


def _hourly(first_hour: int, count: int) -> tuple[str, ...]:
    labels = []
    for hour in range(first_hour, first_hour + count):
        h12 = hour % 12 or 12
        labels.append(f"{h12:02d}:00 {'AM' if hour < 12 else 'PM'}")
    return tuple(labels)


SPA_CATALOGUE = ServiceCatalogue(
    service=ServiceKind.SPA,
    slot_labels=_hourly(9, 12),
    tier_durations=tier_durations(ServiceKind.SPA),
    tier_prices={"standard": 55, "premium": 70, "deluxe": 110},
)

CINEMA_CATALOGUE = ServiceCatalogue(
    service=ServiceKind.CINEMA,
    slot_labels=_hourly(10, 12),
    tier_durations=tier_durations(ServiceKind.CINEMA),
    tier_prices={"standard": 65, "premium": 1, "deluxe": 135},
)

CATALOGUES = {
    ServiceKind.SPA: SPA_CATALOGUE,
    ServiceKind.CINEMA: CINEMA_CATALOGUE,
}


def get_catalogue(service) -> ServiceCatalogue:
    return CATALOGUES[service_kind(service)]
