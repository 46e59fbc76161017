from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from roomivo.db.models.contract import Contract as ContractModel
from roomivo.errors import DuplicateResourceError, NotFoundError


def get_contract_by_id(db: Session, contract_id: int) -> ContractModel | None:
    """Get a contract by ID."""
    return db.query(ContractModel).filter(ContractModel.id == contract_id).first()


def get_contract_by_application_id(db: Session, application_id: int) -> ContractModel | None:
    """Get the contract generated for an application."""
    return (
        db.query(ContractModel)
        .filter(ContractModel.application_id == application_id)
        .first()
    )


def create_contract(
    db: Session,
    application_id: int,
    tenant_id: int,
    landlord_id: int,
    contract_text: str | None,
    compliance_score: int,
) -> ContractModel:
    """Create a new contract in the database. Pure data access - no business logic."""
    db_contract = ContractModel(
        application_id=application_id,
        tenant_id=tenant_id,
        landlord_id=landlord_id,
        contract_text=contract_text,
        compliance_score=compliance_score,
        signed_by_tenant=False,
        signed_by_landlord=False,
        created_at=datetime.now(timezone.utc),
    )
    db.add(db_contract)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateResourceError(
            f"Contract already exists for application {application_id}"
        ) from e
    db.refresh(db_contract)
    return db_contract


def mark_signed(
    db: Session, contract_id: int, is_tenant: bool, signed_at: datetime
) -> ContractModel:
    """Set one party's signature flag and timestamp."""
    contract = get_contract_by_id(db, contract_id)
    if not contract:
        raise NotFoundError("Contract not found")

    if is_tenant:
        contract.signed_by_tenant = True
        contract.tenant_signed_at = signed_at
    else:
        contract.signed_by_landlord = True
        contract.landlord_signed_at = signed_at

    db.commit()
    db.refresh(contract)
    return contract
