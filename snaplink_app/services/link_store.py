from datetime import datetime, timezone
from typing import List, Optional

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from snaplink_app.exceptions import DuplicateCodeError, LinkValidationError, StorageError
from snaplink_app.models.link import Link
from snaplink_app.services.code_generator import generate_code
from snaplink_app.services.validation import is_valid_code, is_valid_url

logger = structlog.get_logger(__name__)


class LinkStore:
    """
    Persistence operations over the links table.

    The store owns transaction boundaries: every write commits on success
    and rolls back on failure. Unexpected database errors are re-raised as
    StorageError so callers never see driver exceptions.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, long_url: str, code: Optional[str] = None) -> Link:
        """
        Insert a new link.

        Args:
            long_url: Redirect target, stored verbatim
            code: Custom code; a random one is generated when omitted

        Returns:
            The persisted Link with server defaults loaded

        Raises:
            LinkValidationError: If the URL or custom code is malformed
            DuplicateCodeError: If the code is already taken
        """
        if not is_valid_url(long_url):
            raise LinkValidationError("Invalid URL format")
        if code is not None and not is_valid_code(code):
            raise LinkValidationError("Code must be 6-8 alphanumeric characters")

        code = code or generate_code()
        link = Link(code=code, long_url=long_url)
        self.db.add(link)
        try:
            self.db.commit()
            self.db.refresh(link)
        except IntegrityError:
            self.db.rollback()
            logger.info("Link code already taken", code=code)
            raise DuplicateCodeError(code)
        except SQLAlchemyError as e:
            self._fail("create", e)

        logger.info("Link created", code=link.code, link_id=link.id)
        return link

    def get_by_code(self, code: str) -> Optional[Link]:
        try:
            return self.db.scalars(select(Link).where(Link.code == code)).first()
        except SQLAlchemyError as e:
            self._fail("get_by_code", e)

    def list_all(self) -> List[Link]:
        """All links, newest first"""
        try:
            stmt = select(Link).order_by(Link.created_at.desc(), Link.id.desc())
            return list(self.db.scalars(stmt))
        except SQLAlchemyError as e:
            self._fail("list_all", e)

    def increment_clicks(self, code: str) -> None:
        """
        Bump the click counter and stamp last_clicked.

        Runs as a single UPDATE so concurrent redirects don't overwrite each
        other's increments. A code that no longer exists matches no rows.
        """
        stmt = (
            update(Link)
            .where(Link.code == code)
            .values(
                total_clicks=Link.total_clicks + 1,
                last_clicked=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("increment_clicks", e)

    def delete(self, code: str) -> bool:
        """Hard delete. Returns True if a row was removed."""
        try:
            result = self.db.execute(delete(Link).where(Link.code == code))
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("delete", e)

        deleted = result.rowcount > 0
        if deleted:
            logger.info("Link deleted", code=code)
        return deleted

    def _fail(self, operation: str, error: SQLAlchemyError):
        try:
            self.db.rollback()
        except SQLAlchemyError as rollback_error:
            # A dead connection can fail the rollback too; the original error wins
            logger.warning("Rollback failed", operation=operation, error=str(rollback_error))
        logger.error("Storage operation failed", operation=operation, error=str(error))
        raise StorageError(f"{operation} failed") from error
