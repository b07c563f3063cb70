from typing import List

from fastapi import APIRouter, Depends, status

from snaplink_app.dependencies import get_link_store
from snaplink_app.exceptions import LinkNotFoundError
from snaplink_app.schemas.link import DeleteResponse, LinkCreate, LinkResponse
from snaplink_app.services.link_store import LinkStore

router = APIRouter(prefix="/links", tags=["links"])


@router.get("", response_model=List[LinkResponse])
def list_links(store: LinkStore = Depends(get_link_store)):
    """List every link, newest first"""
    return store.list_all()


@router.post("", response_model=LinkResponse, status_code=status.HTTP_201_CREATED)
def create_link(
    link_data: LinkCreate,
    store: LinkStore = Depends(get_link_store)
):
    """
    Create a short link, with a generated code unless customCode is given.

    A taken code raises DuplicateCodeError, answered with 409 by the
    application's exception handler.
    """
    return store.create(link_data.long_url, link_data.custom_code)


@router.get("/{code}", response_model=LinkResponse)
def get_link(
    code: str,
    store: LinkStore = Depends(get_link_store)
):
    link = store.get_by_code(code)
    if not link:
        raise LinkNotFoundError()
    return link


@router.delete("/{code}", response_model=DeleteResponse)
def delete_link(
    code: str,
    store: LinkStore = Depends(get_link_store)
):
    """Delete a link permanently"""
    if not store.delete(code):
        raise LinkNotFoundError()
    return DeleteResponse(success=True)
