"""
Bootstrap data: the platform organization, the first superuser, default
system settings and the plan tracking pages. Safe to re-run.

Usage:
    python -m scripts.initial_data
"""
import logging

from app.config import settings
from app.crud import crud_organization, crud_plan_tracking, crud_setting, crud_user
from app.db.session import SessionLocal
from app.schemas.organization import OrganizationCreate
from app.schemas.user import UserCreate
from app.services.feature_matrix import Plan

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def init_db() -> None:
    db = SessionLocal()
    try:
        admin_email = settings.FIRST_ADMIN_EMAIL
        admin_password = settings.FIRST_ADMIN_PASSWORD

        if admin_password == "admin123":
            logger.warning(
                "⚠️  Using default admin password. "
                "Set FIRST_ADMIN_PASSWORD in .env for production."
            )

        slug = crud_organization.slugify(settings.FIRST_ADMIN_ORGANIZATION)
        org = crud_organization.get_by_slug(db, slug)
        if not org:
            logger.info("Creating platform organization: %s", settings.FIRST_ADMIN_ORGANIZATION)
            org = crud_organization.create(db, obj_in=OrganizationCreate(
                name=settings.FIRST_ADMIN_ORGANIZATION, slug=slug, plan=Plan.PREMIUM.value,
            ))

        user = crud_user.get_by_email(db, email=admin_email)
        if not user:
            logger.info("Creating superuser: %s", admin_email)
            crud_user.create(
                db,
                obj_in=UserCreate(email=admin_email, password=admin_password,
                                  name="Platform Admin", role="admin"),
                organization_id=org.id,
                is_superuser=True,
            )
        elif not user.is_superuser:
            user.is_superuser = True
            db.commit()

        crud_setting.seed_defaults(db)
        if crud_plan_tracking.table_exists(db):
            crud_plan_tracking.seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    logger.info("Creating initial data")
    init_db()
    logger.info("Initial data created")
