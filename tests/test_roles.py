from sqlalchemy.orm import Session


def test_get_roles(client, db: Session):
    """Roles are public and seeded by the first migration."""
    response = client.get("/api/roles")
    assert response.status_code == 200
    names = [role["name"] for role in response.json()]
    assert names == ["admin", "tenant", "landlord"]


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
