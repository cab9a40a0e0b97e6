"""Create all database tables (development shortcut for `alembic upgrade head`)"""
import logging

from app.db.base_class import Base
from app.db.session import engine
# Import all models so they are registered with Base.metadata
import app.models  # noqa: F401

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_tables():
    logger.info("Creating all database tables on %s ...", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)
    logger.info("All tables created successfully!")


if __name__ == "__main__":
    create_tables()
