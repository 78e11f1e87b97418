"""
Expo Push Notifications

Sends deadline reminders to the mobile app through Expo's push API and
keeps the registry of device push tokens clean.

Delivery is best effort: transport failures come back as failed
PushResult objects and are never raised to the caller.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union
from uuid import uuid4

import httpx
from sqlalchemy.orm import Session

from ...config import EXPO_ACCESS_TOKEN, EXPO_PUSH_URL, EXPO_RECEIPTS_URL, PUSH_TIMEOUT_SECONDS
from ...models.db_models import PushTokenDB, PushPlatform

logger = logging.getLogger(__name__)


DEFAULT_CHANNEL_ID = "deadline-reminders"
DEVICE_NOT_REGISTERED = "DeviceNotRegistered"


@dataclass
class PushResult:
    success: bool
    ticket_id: Optional[str] = None
    error: Optional[str] = None
    token: Optional[str] = None
    error_code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "ticket_id": self.ticket_id, "error": self.error}


# =============================================================================
# EXPO API CLIENT
# =============================================================================

class ExpoPushClient:
    """Thin wrapper over Expo's push send and receipt endpoints."""

    def __init__(
        self,
        http_client: Optional[httpx.Client] = None,
        push_url: str = EXPO_PUSH_URL,
        receipts_url: str = EXPO_RECEIPTS_URL,
        access_token: str = EXPO_ACCESS_TOKEN,
    ):
        self.client = http_client or httpx.Client(timeout=PUSH_TIMEOUT_SECONDS)
        self.push_url = push_url
        self.receipts_url = receipts_url
        self.access_token = access_token

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip, deflate",
            "Content-Type": "application/json",
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    @staticmethod
    def build_messages(
        to: Union[str, Sequence[str]],
        title: str,
        body: str,
        data: Optional[Dict[str, Any]] = None,
        sound: str = "default",
        priority: str = "high",
        channel_id: str = DEFAULT_CHANNEL_ID,
    ) -> List[Dict[str, Any]]:
        tokens = [to] if isinstance(to, str) else list(to)
        return [
            {
                "to": token,
                "title": title,
                "body": body,
                "data": data or {},
                "sound": sound,
                "priority": priority,
                "channelId": channel_id,
            }
            for token in tokens
        ]

    def send(self, messages: List[Dict[str, Any]]) -> List[PushResult]:
        """POST messages; one result per returned ticket."""
        if not messages:
            return []
        try:
            response = self.client.post(self.push_url, json=messages, headers=self._headers())
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Expo push request failed: {e}")
            return [PushResult(success=False, error=str(e))]

        if payload.get("errors"):
            return [
                PushResult(success=False, error=(err or {}).get("message") or "Unknown error")
                for err in payload["errors"]
            ]

        results = []
        for message, ticket in zip(messages, payload.get("data") or []):
            details = ticket.get("details") or {}
            results.append(PushResult(
                success=ticket.get("status") == "ok",
                ticket_id=ticket.get("id"),
                error=ticket.get("message"),
                token=message["to"],
                error_code=details.get("error"),
            ))
        return results

    def get_receipts(self, ticket_ids: List[str]) -> Dict[str, Dict[str, Any]]:
        """Receipt objects keyed by ticket id. Empty on transport failure."""
        if not ticket_ids:
            return {}
        try:
            response = self.client.post(self.receipts_url, json={"ids": ticket_ids}, headers=self._headers())
            response.raise_for_status()
            return response.json().get("data") or {}
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Expo receipts request failed: {e}")
            return {}

    def check_receipts(self, ticket_ids: List[str]) -> List[str]:
        """Ticket ids whose receipt reports the device is no longer registered."""
        unregistered = []
        for ticket_id, receipt in self.get_receipts(ticket_ids).items():
            if receipt.get("status") == "error":
                details = receipt.get("details") or {}
                logger.warning(f"Push receipt error for {ticket_id}: {receipt.get('message')}")
                if details.get("error") == DEVICE_NOT_REGISTERED:
                    unregistered.append(ticket_id)
        return unregistered


# =============================================================================
# TOKEN REGISTRY
# =============================================================================

class PushTokenRegistry:
    """CRUD for device push tokens. One row per (user, device)."""

    def __init__(self, db: Session):
        self.db = db

    def register_token(
        self,
        user_id: str,
        expo_push_token: str,
        device_id: str,
        platform: Union[PushPlatform, str],
    ) -> PushTokenDB:
        existing = self.db.query(PushTokenDB).filter(
            PushTokenDB.user_id == user_id,
            PushTokenDB.device_id == device_id,
        ).first()

        if existing:
            existing.expo_push_token = expo_push_token
            existing.platform = PushPlatform(platform)
            existing.is_valid = True
            token = existing
        else:
            token = PushTokenDB(
                id=str(uuid4()),
                user_id=user_id,
                expo_push_token=expo_push_token,
                device_id=device_id,
                platform=PushPlatform(platform),
                is_valid=True,
            )
            self.db.add(token)

        self.db.flush()
        logger.info(f"Registered push token for user {user_id} on device {device_id}")
        return token

    def get_valid_tokens(self, user_id: str) -> List[PushTokenDB]:
        return self.db.query(PushTokenDB).filter(
            PushTokenDB.user_id == user_id,
            PushTokenDB.is_valid.is_(True),
        ).all()

    def invalidate_token(self, expo_push_token: str) -> int:
        """Mark every row holding this token invalid. Returns rows touched."""
        rows = self.db.query(PushTokenDB).filter(PushTokenDB.expo_push_token == expo_push_token).all()
        for row in rows:
            row.is_valid = False
        if rows:
            self.db.flush()
            logger.info(f"Invalidated push token {expo_push_token}")
        return len(rows)

    def delete_token(self, user_id: str, device_id: str) -> bool:
        row = self.db.query(PushTokenDB).filter(
            PushTokenDB.user_id == user_id,
            PushTokenDB.device_id == device_id,
        ).first()
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        return True


# =============================================================================
# DEADLINE REMINDERS
# =============================================================================

def reminder_title(days_remaining: int) -> str:
    if days_remaining <= 1:
        return "FINAL REMINDER: 1 Day Left!"
    return f"{days_remaining} Days Until Deadline"


def reminder_body(project_name: str, days_remaining: int) -> str:
    if days_remaining <= 1:
        return (
            f'CRITICAL: Your preliminary notice for "{project_name}" is due TOMORROW! '
            f"File now to avoid losing your lien rights!"
        )
    if days_remaining <= 3:
        return (
            f'Urgent: Your preliminary notice for "{project_name}" is due in {days_remaining} days. '
            f"Take action now to protect your lien rights!"
        )
    return (
        f'Your preliminary notice for "{project_name}" is due in {days_remaining} days. '
        f"Don't miss your filing deadline!"
    )


def urgency_level(days_remaining: int) -> str:
    if days_remaining <= 1:
        return "CRITICAL"
    if days_remaining <= 3:
        return "Urgent"
    return ""


class PushNotificationService:
    """Sends notifications to all of a user's valid devices."""

    def __init__(self, db: Session, client: Optional[ExpoPushClient] = None):
        self.db = db
        self.registry = PushTokenRegistry(db)
        self.client = client or ExpoPushClient()

    def send_to_user(
        self,
        user_id: str,
        title: str,
        body: str,
        data: Optional[Dict[str, Any]] = None,
        priority: str = "high",
    ) -> List[PushResult]:
        tokens = [t.expo_push_token for t in self.registry.get_valid_tokens(user_id)]
        if not tokens:
            return [PushResult(success=False, error="No valid push tokens found")]

        messages = ExpoPushClient.build_messages(tokens, title, body, data=data, priority=priority)
        results = self.client.send(messages)

        for result in results:
            if result.error_code == DEVICE_NOT_REGISTERED and result.token:
                self.registry.invalidate_token(result.token)

        sent = sum(1 for r in results if r.success)
        logger.info(f"Push to user {user_id}: {sent}/{len(tokens)} delivered to Expo")
        return results

    def send_deadline_reminder(
        self,
        user_id: str,
        project_name: str,
        days_remaining: int,
        project_id: Optional[str] = None,
    ) -> List[PushResult]:
        data = {
            "type": "deadline-reminder",
            "daysRemaining": days_remaining,
            "urgencyLevel": urgency_level(days_remaining),
        }
        if project_id:
            data["projectId"] = project_id

        return self.send_to_user(
            user_id,
            reminder_title(days_remaining),
            reminder_body(project_name, days_remaining),
            data=data,
            priority="high" if days_remaining <= 1 else "normal",
        )

    def process_receipts(self, ticket_tokens: Dict[str, str]) -> int:
        """
        Check receipts for {ticket_id: token} and invalidate tokens whose
        device is no longer registered. Returns number invalidated.
        """
        invalidated = 0
        for ticket_id in self.client.check_receipts(list(ticket_tokens)):
            token = ticket_tokens.get(ticket_id)
            if token:
                invalidated += self.registry.invalidate_token(token)
        return invalidated
