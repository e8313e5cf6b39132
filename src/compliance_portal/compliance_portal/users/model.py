from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Portal login. Client users are bound to exactly one client company."""

    user_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    client_id: Optional[int] = None
    is_active: bool = True
