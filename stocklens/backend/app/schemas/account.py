"""
Account summary schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class AccountUser(BaseModel):
    id: int
    email: str
    username: Optional[str] = None

    class Config:
        from_attributes = True


class AccountStats(BaseModel):
    product_count: int
    import_count: int
    last_import: Optional[datetime] = None


class AccountResponse(BaseModel):
    user: AccountUser
    stats: AccountStats
