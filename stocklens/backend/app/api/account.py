"""
Account summary API
"""
from fastapi import APIRouter, Depends

from app.dependencies import get_current_user
from app.schemas.account import AccountResponse, AccountStats, AccountUser
from app.services.data_service import DataService

router = APIRouter()


@router.get("/me", response_model=AccountResponse)
def get_me(current_user_and_db: tuple = Depends(get_current_user)):
    """Current user plus product/import counts and the time of the last import."""
    user, db = current_user_and_db
    return AccountResponse(
        user=AccountUser.model_validate(user),
        stats=AccountStats(**DataService.import_stats(db, user.id)),
    )
