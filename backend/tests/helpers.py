"""
Shared constants and helpers for API tests.
"""

from pos_api.models import Admin
from pos_api.repositories import AdminRepository

API = "/api/v1"
ADMIN = {"userType": "admin"}
GUEST = {"userType": "guest"}
PASSWORD = "password123"


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def make_admin(db_session, role: str, email: str, **fields) -> Admin:
    """Persist an admin through the credential store (password gets hashed)."""
    values = {
        "first_name": "Test",
        "last_name": role.replace(" ", ""),
        "phone_number": "01000000000",
        "email": email,
        "password": PASSWORD,
        "role": role,
    }
    values.update(fields)
    return AdminRepository(db_session).create(Admin(**values))


def login(client, email: str, password: str = PASSWORD) -> str:
    response = client.post(
        f"{API}/admins/login",
        params=GUEST,
        json={"email": email, "password": password},
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]
