"""
Push Notification API Routes

Device push token registration for the mobile app.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models.db_models import PushPlatform, UserDB
from ..services.notifications import PushTokenRegistry


router = APIRouter(prefix="/notifications", tags=["notifications"])


class RegisterTokenRequest(BaseModel):
    expo_push_token: str = Field(..., description="ExponentPushToken[...]")
    device_id: str
    platform: PushPlatform

    @field_validator('expo_push_token')
    @classmethod
    def validate_token(cls, v):
        if not (v.startswith('ExponentPushToken[') or v.startswith('ExpoPushToken[')):
            raise ValueError('Invalid Expo push token')
        return v


def _serialize_token(token) -> dict:
    return {
        "id": token.id,
        "expo_push_token": token.expo_push_token,
        "device_id": token.device_id,
        "platform": token.platform.value,
        "is_valid": bool(token.is_valid),
    }


@router.post("/tokens", response_model=dict)
def register_token(
    body: RegisterTokenRequest,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    """Register or refresh the push token for a device."""
    token = PushTokenRegistry(db).register_token(
        current_user.id, body.expo_push_token, body.device_id, body.platform,
    )
    db.commit()
    return _serialize_token(token)


@router.get("/tokens", response_model=List[dict])
def list_tokens(
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    return [_serialize_token(t) for t in PushTokenRegistry(db).get_valid_tokens(current_user.id)]


@router.delete("/tokens/{device_id}", response_model=dict)
def delete_token(
    device_id: str,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    if not PushTokenRegistry(db).delete_token(current_user.id, device_id):
        raise HTTPException(status_code=404, detail="Push token not found")
    db.commit()
    return {"deleted": True, "device_id": device_id}
