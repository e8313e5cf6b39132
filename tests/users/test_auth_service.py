from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.compliance_portal.compliance_portal.core.enums import Role
from src.compliance_portal.compliance_portal.core.exceptions import AuthenticationError
from src.compliance_portal.compliance_portal.users.model import User
from src.compliance_portal.compliance_portal.users.service import AuthService


@dataclass
class InMemoryUsers:
    users: dict[str, User]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return next((u for u in self.users.values() if u.user_id == user_id), None)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.users.get(username)


@pytest.fixture
def auth():
    users = {
        "admin": User(1, "Admin", "admin", generate_password_hash("admin123"), Role.ADMIN),
        "demo": User(2, "Demo Client", "demo", generate_password_hash("client123"), Role.CLIENT, client_id=1),
        "orphan": User(3, "No Company", "orphan", generate_password_hash("pw"), Role.CLIENT),
        "gone": User(4, "Disabled", "gone", generate_password_hash("pw"), Role.ADMIN, is_active=False),
        "legacy": User(5, "Legacy", "legacy", "CHANGE_ME", Role.ADMIN),
    }
    return AuthService(InMemoryUsers(users))


def test_admin_login(auth):
    s_user = auth.authenticate(" admin ", "admin123")
    assert (s_user.user_id, s_user.role, s_user.client_id) == (1, Role.ADMIN, None)


def test_client_login_carries_client(auth):
    assert auth.authenticate("demo", "client123").client_id == 1


@pytest.mark.parametrize(
    ("username", "password"),
    [("admin", "wrong"), ("nobody", "x"), ("gone", "pw"), ("orphan", "pw"), ("legacy", "CHANGE_ME"), ("", "")],
)
def test_rejected_logins(auth, username, password):
    with pytest.raises(AuthenticationError):
        auth.authenticate(username, password)
