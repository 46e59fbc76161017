import pytest
from sqlalchemy.orm import Session

from conftest import auth_headers
from roomivo.errors import DuplicateResourceError
from roomivo.repositories.contract import create_contract


def _apply(client, tenant_token: str, property_id: int) -> int:
    response = client.post(
        "/api/applications",
        json={"propertyId": property_id},
        headers=auth_headers(tenant_token),
    )
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture(scope="function")
def accepted_application_id(client, tenant_token: str, landlord_token: str, listing) -> int:
    application_id = _apply(client, tenant_token, listing.id)
    response = client.put(
        f"/api/applications/{application_id}",
        json={"status": "accepted"},
        headers=auth_headers(landlord_token),
    )
    assert response.status_code == 200
    return application_id


@pytest.fixture(scope="function")
def contract(client, landlord_token: str, accepted_application_id: int) -> dict:
    response = client.post(
        "/api/contracts",
        json={"applicationId": accepted_application_id, "contractText": "Lease terms"},
        headers=auth_headers(landlord_token),
    )
    assert response.status_code == 201
    return response.json()


# ============================================================================
# CREATE CONTRACT TESTS
# ============================================================================


def test_create_contract(contract: dict, accepted_application_id: int, tenant_user_dict: dict, landlord_user_dict: dict):
    assert contract["applicationId"] == accepted_application_id
    assert contract["tenantId"] == tenant_user_dict["id"]
    assert contract["landlordId"] == landlord_user_dict["id"]
    assert contract["complianceScore"] == 95
    assert contract["signedByTenant"] is False
    assert contract["signedByLandlord"] is False
    assert contract["tenantSignedAt"] is None


def test_create_contract_as_tenant(client, db: Session, tenant_token: str, accepted_application_id: int):
    response = client.post(
        "/api/contracts",
        json={"applicationId": accepted_application_id},
        headers=auth_headers(tenant_token),
    )
    assert response.status_code == 201


def test_create_contract_for_pending_application_fails(client, db: Session, tenant_token: str, landlord_token: str, listing):
    application_id = _apply(client, tenant_token, listing.id)
    response = client.post(
        "/api/contracts",
        json={"applicationId": application_id},
        headers=auth_headers(landlord_token),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_create_contract_by_stranger_fails(client, db: Session, another_landlord_token: str, accepted_application_id: int):
    response = client.post(
        "/api/contracts",
        json={"applicationId": accepted_application_id},
        headers=auth_headers(another_landlord_token),
    )
    assert response.status_code == 403


def test_create_contract_twice_fails(client, db: Session, landlord_token: str, contract: dict):
    response = client.post(
        "/api/contracts",
        json={"applicationId": contract["applicationId"]},
        headers=auth_headers(landlord_token),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "DUPLICATE_RESOURCE"


def test_create_contract_unknown_application(client, db: Session, landlord_token: str):
    response = client.post(
        "/api/contracts",
        json={"applicationId": 9999},
        headers=auth_headers(landlord_token),
    )
    assert response.status_code == 404


def test_create_contract_without_authentication(client, db: Session, accepted_application_id: int):
    response = client.post("/api/contracts", json={"applicationId": accepted_application_id})
    assert response.status_code == 401


# ============================================================================
# READ TESTS
# ============================================================================


def test_get_contract_by_application(client, db: Session, contract: dict, tenant_token: str, admin_token: str):
    for token in (tenant_token, admin_token):
        response = client.get(
            f"/api/contracts/{contract['applicationId']}", headers=auth_headers(token)
        )
        assert response.status_code == 200
        assert response.json()["id"] == contract["id"]


def test_get_contract_as_stranger_fails(client, db: Session, contract: dict, another_tenant_token: str):
    response = client.get(
        f"/api/contracts/{contract['applicationId']}", headers=auth_headers(another_tenant_token)
    )
    assert response.status_code == 403


def test_get_missing_contract(client, db: Session, tenant_token: str, accepted_application_id: int):
    response = client.get(
        f"/api/contracts/{accepted_application_id}", headers=auth_headers(tenant_token)
    )
    assert response.status_code == 404


# ============================================================================
# SIGN TESTS
# ============================================================================


def test_tenant_signs(client, db: Session, contract: dict, tenant_token: str):
    response = client.post(
        f"/api/contracts/{contract['id']}/sign",
        json={"isTenant": True},
        headers=auth_headers(tenant_token),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["signedByTenant"] is True
    assert data["tenantSignedAt"] is not None
    assert data["signedByLandlord"] is False
    assert data["landlordSignedAt"] is None


def test_both_parties_sign(client, db: Session, contract: dict, tenant_token: str, landlord_token: str):
    client.post(
        f"/api/contracts/{contract['id']}/sign",
        json={"isTenant": True},
        headers=auth_headers(tenant_token),
    )
    response = client.post(
        f"/api/contracts/{contract['id']}/sign",
        json={"isTenant": False},
        headers=auth_headers(landlord_token),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["signedByTenant"] is True
    assert data["signedByLandlord"] is True


def test_landlord_cannot_sign_as_tenant(client, db: Session, contract: dict, landlord_token: str):
    response = client.post(
        f"/api/contracts/{contract['id']}/sign",
        json={"isTenant": True},
        headers=auth_headers(landlord_token),
    )
    assert response.status_code == 403

    contract_after = client.get(
        f"/api/contracts/{contract['applicationId']}", headers=auth_headers(landlord_token)
    ).json()
    assert contract_after["signedByTenant"] is False


def test_tenant_cannot_sign_as_landlord(client, db: Session, contract: dict, tenant_token: str):
    response = client.post(
        f"/api/contracts/{contract['id']}/sign",
        json={"isTenant": False},
        headers=auth_headers(tenant_token),
    )
    assert response.status_code == 403


def test_resigning_is_accepted(client, db: Session, contract: dict, tenant_token: str):
    for _ in range(2):
        response = client.post(
            f"/api/contracts/{contract['id']}/sign",
            json={"isTenant": True},
            headers=auth_headers(tenant_token),
        )
        assert response.status_code == 200
        assert response.json()["signedByTenant"] is True


def test_sign_unknown_contract(client, db: Session, tenant_token: str):
    response = client.post(
        "/api/contracts/9999/sign",
        json={"isTenant": True},
        headers=auth_headers(tenant_token),
    )
    assert response.status_code == 404


def test_repository_rejects_second_contract_for_application(db: Session, contract: dict):
    """The unique application constraint is reported as a duplicate, not a server error."""
    with pytest.raises(DuplicateResourceError):
        create_contract(
            db,
            application_id=contract["applicationId"],
            tenant_id=contract["tenantId"],
            landlord_id=contract["landlordId"],
            contract_text=None,
            compliance_score=95,
        )
