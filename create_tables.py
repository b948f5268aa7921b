"""Create the vocabulary engine tables on the configured database."""
from loguru import logger

from app.db import models  # noqa: F401  # registers the engine's tables on Base.metadata
from app.db.base import Base
from app.db.session import engine


def main() -> None:
    tables = sorted(Base.metadata.tables)
    logger.info("Creating tables", url=engine.url.render_as_string(hide_password=True), tables=tables)
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created", count=len(tables))


if __name__ == "__main__":
    main()
