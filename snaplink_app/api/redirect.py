import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import sessionmaker

from snaplink_app.dependencies import get_link_store, get_session_factory
from snaplink_app.services.link_store import LinkStore
from snaplink_app.services.validation import is_valid_code

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["redirect"])


def record_click(code: str, session_factory: sessionmaker) -> None:
    """
    Increment the click counter on a session of its own (fire-and-forget).

    Failures are logged and dropped; the visitor has already been redirected.
    """
    db = session_factory()
    try:
        LinkStore(db).increment_clicks(code)
    except Exception:
        logger.exception("Click increment failed", code=code)
    finally:
        db.close()


@router.get("/{code}")
def redirect_to_long_url(
    code: str,
    background_tasks: BackgroundTasks,
    store: LinkStore = Depends(get_link_store),
    session_factory: sessionmaker = Depends(get_session_factory),
):
    """
    Redirect to the stored URL.

    Flow:
    1. Reject codes that can't exist (wrong length or characters)
    2. Look up the link
    3. Schedule the click increment to run after the response is sent
    4. Redirect with 302
    """
    if not is_valid_code(code):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    link = store.get_by_code(code)
    if not link:
        logger.info("Redirect failed - link not found", code=code)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    background_tasks.add_task(record_click, code, session_factory)

    logger.info("Redirect", code=code)
    return RedirectResponse(url=link.long_url, status_code=status.HTTP_302_FOUND)
