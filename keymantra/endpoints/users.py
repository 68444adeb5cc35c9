# keymantra/endpoints/users.py
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from keymantra.models.course import UserOut
from keymantra.services.user_service import sync_user
from keymantra.utils.db import get_db
from keymantra.utils.logger import logger

router = APIRouter(
    tags=["Users"]
)

class UserSync(BaseModel):
    user_id: str = Field(..., min_length=1)
    email: str = ""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None

@router.post("/sync", response_model=UserOut)
async def sync_user_endpoint(payload: UserSync, db: AsyncSession = Depends(get_db)):
    """
    Records the signed-in user in the database the first time they are seen.
    Authentication happens upstream; this only mirrors the identity.
    """
    logger.debug(f"Syncing user: {payload.user_id}")
    user, created = await sync_user(
        db, payload.user_id, payload.email, payload.first_name, payload.last_name, payload.username
    )
    return UserOut(user_id=user.id, email=user.email, name=user.name, created=created)
