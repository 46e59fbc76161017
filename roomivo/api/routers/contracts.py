from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from roomivo.api.deps import get_current_user, get_db
from roomivo.db.models.user import User
from roomivo.schemas.contract import Contract, ContractCreate, ContractSign
from roomivo.services.contract import (
    create_contract,
    get_contract_for_application,
    sign_contract,
)

router = APIRouter(prefix="/contracts", tags=["contracts"])


@router.post("", response_model=Contract, status_code=status.HTTP_201_CREATED)
def create_new_contract(
    contract_data: ContractCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Generate the contract for an accepted application.

    Either party (applicant or landlord) may create it; the parties are taken
    from the application.
    """
    contract = create_contract(
        db,
        current_user,
        application_id=contract_data.application_id,
        contract_text=contract_data.contract_text,
    )
    return Contract.model_validate(contract)


@router.get("/{application_id}", response_model=Contract)
def get_contract_by_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get the contract of an application. Visible to both parties and admins."""
    return Contract.model_validate(
        get_contract_for_application(db, application_id, current_user)
    )


@router.post("/{contract_id}/sign", response_model=Contract)
def sign_contract_by_id(
    contract_id: int,
    sign_data: ContractSign,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Sign a contract as tenant (``isTenant: true``) or landlord (``isTenant: false``).

    The caller must be the party for the chosen side.
    """
    contract = sign_contract(db, contract_id, current_user, is_tenant=sign_data.is_tenant)
    return Contract.model_validate(contract)
