from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Client:
    client_id: int
    name: str
    address: Optional[str] = None
    logo_url: Optional[str] = None
