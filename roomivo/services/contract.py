import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

import roomivo.repositories.application as application_repo
import roomivo.repositories.contract as contract_repo
import roomivo.repositories.property as property_repo
from roomivo.db.models.contract import Contract as ContractModel
from roomivo.db.models.property import DEFAULT_COMPLIANCE_SCORE
from roomivo.db.models.role import ADMIN
from roomivo.db.models.user import User
from roomivo.domain.application_status import ACCEPTED
from roomivo.domain.ownership import ensure_owner, is_party
from roomivo.errors import (
    DomainValidationError,
    DuplicateResourceError,
    ForbiddenError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def create_contract(
    db: Session, current_user: User, application_id: int, contract_text: str | None
) -> ContractModel:
    """
    Generate the contract for an accepted application.

    - Application must exist and be accepted
    - Caller must be the applicant or the property's landlord
    - Tenant and landlord are taken from the application, not from the client
    - One contract per application

    Raises:
        NotFoundError: If the application or its property doesn't exist
        DomainValidationError: If the application is not accepted
        ForbiddenError: If the caller is not a party
        DuplicateResourceError: If a contract already exists for the application
    """
    application = application_repo.get_application_by_id(db, application_id)
    if not application:
        raise NotFoundError(f"Application with id {application_id} not found")

    db_property = property_repo.get_property_by_id(db, application.property_id)
    if not db_property:
        raise NotFoundError(f"Property with id {application.property_id} not found")

    ensure_owner(
        current_user,
        application.tenant_id,
        db_property.landlord_id,
        action="create a contract for this application",
    )

    if application.status != ACCEPTED:
        raise DomainValidationError("A contract can only be created for an accepted application")

    if contract_repo.get_contract_by_application_id(db, application_id):
        raise DuplicateResourceError(
            f"Contract already exists for application {application_id}"
        )

    contract = contract_repo.create_contract(
        db,
        application_id=application_id,
        tenant_id=application.tenant_id,
        landlord_id=db_property.landlord_id,
        contract_text=contract_text,
        compliance_score=DEFAULT_COMPLIANCE_SCORE,
    )
    logger.info("Contract %s created for application %s", contract.id, application_id)
    return contract


def get_contract_for_application(
    db: Session, application_id: int, current_user: User
) -> ContractModel:
    """
    Raises:
        NotFoundError: If no contract exists for the application
        ForbiddenError: If the caller is not a party (admins may read any contract)
    """
    contract = contract_repo.get_contract_by_application_id(db, application_id)
    if not contract:
        raise NotFoundError("Contract not found")

    if current_user.role.name != ADMIN and not is_party(
        current_user, contract.tenant_id, contract.landlord_id
    ):
        raise ForbiddenError("Not enough permissions")
    return contract


def sign_contract(
    db: Session, contract_id: int, current_user: User, is_tenant: bool
) -> ContractModel:
    """
    Record one party's signature.

    ``is_tenant`` selects the side; the caller must be that side's party.
    Signing again overwrites the timestamp.

    Raises:
        NotFoundError: If the contract doesn't exist
        ForbiddenError: If the caller is not the party for that side
    """
    contract = contract_repo.get_contract_by_id(db, contract_id)
    if not contract:
        raise NotFoundError("Contract not found")

    signer_id = contract.tenant_id if is_tenant else contract.landlord_id
    side = "tenant" if is_tenant else "landlord"
    ensure_owner(current_user, signer_id, action=f"sign this contract as {side}")

    contract = contract_repo.mark_signed(
        db, contract_id, is_tenant=is_tenant, signed_at=datetime.now(timezone.utc)
    )
    logger.info("User %s signed contract %s as %s", current_user.id, contract_id, side)
    return contract
