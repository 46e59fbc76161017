from sqlalchemy.orm import Session

import roomivo.repositories.property as property_repo
from roomivo.core.config import settings
from roomivo.db.models.user import User
from roomivo.domain.matching import TenantProfile, top_matches
from roomivo.schemas.property import PropertyMatch


def find_matches(db: Session, current_user: User) -> list[PropertyMatch]:
    """Rank every verified listing against the caller's profile and keep the best ones."""
    profile = TenantProfile.from_user(current_user)
    listings = property_repo.get_verified_properties(db)
    return [
        PropertyMatch(
            property_id=listing.id,
            title=listing.title,
            price=listing.price,
            city=listing.city,
            amenities=listing.amenities or [],
            match_score=score,
        )
        for listing, score in top_matches(profile, listings, limit=settings.match_limit)
    ]
