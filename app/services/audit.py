# backend-server/app/services/audit.py
# Append-only audit trail. A failed write is logged and rolled back, never raised.
import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.core.enums import ActivityAction, TargetType
from app.db import models

logger = logging.getLogger(__name__)


class ActivityLogger:
    """Writes ActivityLog rows for user and leave transitions."""

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        actor_id: int,
        action: ActivityAction,
        target_type: TargetType,
        target_id: int,
        changes: Optional[dict[str, Any]] = None,
        description: str = "",
        metadata: Optional[dict[str, Any]] = None,
    ) -> Optional[models.ActivityLog]:
        try:
            entry = models.ActivityLog(
                actor_id=actor_id,
                action=action,
                target_type=target_type,
                target_id=target_id,
                changes=changes or {},
                description=description,
                meta=metadata or {},
            )
            self.db.add(entry)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Error logging activity %s on %s %s", action, target_type, target_id)
            return None
        return entry

    # --- User events ---
    def user_created(self, actor_id: int, user_id: int, user_data: dict) -> Optional[models.ActivityLog]:
        return self.record(actor_id, ActivityAction.USER_CREATED, TargetType.USER, user_id,
                           user_data, f"User {user_data.get('name')} created")

    def user_updated(self, actor_id: int, user_id: int, changes: dict) -> Optional[models.ActivityLog]:
        return self.record(actor_id, ActivityAction.USER_UPDATED, TargetType.USER, user_id,
                           changes, "User profile updated")

    def user_deactivated(self, actor_id: int, user_id: int, user_name: str) -> Optional[models.ActivityLog]:
        return self.record(actor_id, ActivityAction.USER_DEACTIVATED, TargetType.USER, user_id,
                           {}, f"User {user_name} deactivated")

    # --- Leave events ---
    def leave_created(self, actor_id: int, leave_id: int, leave_data: dict) -> Optional[models.ActivityLog]:
        return self.record(actor_id, ActivityAction.LEAVE_CREATED, TargetType.LEAVE, leave_id,
                           leave_data, "Leave request created")

    def leave_approved(self, actor_id: int, leave_id: int, comment: Optional[str]) -> Optional[models.ActivityLog]:
        return self.record(actor_id, ActivityAction.LEAVE_APPROVED, TargetType.LEAVE, leave_id,
                           {"comment": comment}, "Leave request approved")

    def leave_rejected(self, actor_id: int, leave_id: int, comment: Optional[str]) -> Optional[models.ActivityLog]:
        return self.record(actor_id, ActivityAction.LEAVE_REJECTED, TargetType.LEAVE, leave_id,
                           {"comment": comment}, "Leave request rejected")

    def leave_cancelled(self, actor_id: int, leave_id: int) -> Optional[models.ActivityLog]:
        return self.record(actor_id, ActivityAction.LEAVE_CANCELLED, TargetType.LEAVE, leave_id,
                           {}, "Leave request cancelled")
