# backend-server/app/db/init_db.py
import logging

from sqlalchemy.orm import Session

from app.core import security
from app.core.config import settings
from app.core.enums import Role, UserStatus
from app.db import models

logger = logging.getLogger(__name__)


def init_db(db: Session) -> None:
    """Creates the tables and seeds the first super administrator if configured."""
    models.Base.metadata.create_all(bind=db.get_bind())

    if not (settings.SUPER_ADMIN_EMAIL and settings.SUPER_ADMIN_PASSWORD):
        logger.info("SUPER_ADMIN_EMAIL/SUPER_ADMIN_PASSWORD not set, skipping admin seed")
        return
    if db.query(models.User).filter(models.User.role == Role.SUPER_ADMIN).first():
        return

    admin = models.User(
        name="Super Administrator",
        email=settings.SUPER_ADMIN_EMAIL.lower(),
        hashed_password=security.get_password_hash(settings.SUPER_ADMIN_PASSWORD),
        phone="9999999999",
        role=Role.SUPER_ADMIN,
        status=UserStatus.ACTIVE,
    )
    db.add(admin)
    db.commit()
    logger.info("Super admin created with email %s", admin.email)
