from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

BUDGET_POINTS = 30
BUDGET_PARTIAL_POINTS = 15
BUDGET_TOLERANCE = 1.1
LOCATION_POINTS = 25
AMENITY_POINTS = 25
COMPLIANCE_HIGH_POINTS = 20
COMPLIANCE_MEDIUM_POINTS = 10
COMPLIANCE_HIGH_THRESHOLD = 90
COMPLIANCE_MEDIUM_THRESHOLD = 80


@dataclass(frozen=True, slots=True)
class TenantProfile:
    """What a tenant is looking for. Every criterion is optional."""

    budget_min: float | None = None
    budget_max: float | None = None
    preferred_locations: Sequence[str] = field(default_factory=tuple)
    amenities_required: Sequence[str] = field(default_factory=tuple)

    @classmethod
    def from_user(cls, user: Any) -> TenantProfile:
        return cls(
            budget_min=user.budget_min,
            budget_max=user.budget_max,
            preferred_locations=tuple(user.preferred_locations or ()),
            amenities_required=tuple(user.amenities_required or ()),
        )


def _budget_points(profile: TenantProfile, price: float) -> int:
    if profile.budget_min is None or profile.budget_max is None:
        return 0
    if profile.budget_min <= price <= profile.budget_max:
        return BUDGET_POINTS
    if price <= profile.budget_max * BUDGET_TOLERANCE:
        return BUDGET_PARTIAL_POINTS
    return 0


def _amenity_points(profile: TenantProfile, amenities: Iterable[str]) -> int:
    required = list(profile.amenities_required)
    if not required:
        return 0
    offered = set(amenities)
    matched = sum(1 for amenity in required if amenity in offered)
    # round() is half-to-even: 1 of 2 amenities gives 12 points, not 13
    return round(AMENITY_POINTS * matched / len(required))


def _compliance_points(compliance_score: float | None) -> int:
    if compliance_score is None:
        return 0
    if compliance_score >= COMPLIANCE_HIGH_THRESHOLD:
        return COMPLIANCE_HIGH_POINTS
    if compliance_score >= COMPLIANCE_MEDIUM_THRESHOLD:
        return COMPLIANCE_MEDIUM_POINTS
    return 0


def score_match(profile: TenantProfile, listing: Any) -> int:
    """Score how well a listing fits a tenant profile, from 0 to 100.

    ``listing`` is anything exposing ``price``, ``city``, ``amenities`` and
    ``legal_compliance_score`` (an ORM row or a plain namespace).
    """
    score = 0
    if listing.price is not None:
        score += _budget_points(profile, listing.price)
    if listing.city is not None and listing.city in profile.preferred_locations:
        score += LOCATION_POINTS
    score += _amenity_points(profile, listing.amenities or ())
    score += _compliance_points(listing.legal_compliance_score)
    return int(round(score))


def top_matches(
    profile: TenantProfile, listings: Iterable[Any], limit: int = 5
) -> list[tuple[Any, int]]:
    """Return the ``limit`` best (listing, score) pairs, best first.

    sorted() is stable, so listings with equal scores keep their catalog order.
    """
    scored = [(listing, score_match(profile, listing)) for listing in listings]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored[:limit]
