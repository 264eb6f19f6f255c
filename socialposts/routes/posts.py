from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, List, Optional
from pymongo.errors import ExecutionTimeout, OperationFailure
import logging

from ..auth import get_current_user
from ..database import get_db
from ..errors import NotFound, PostValidationError
from ..models.post import PostInput, PostOut, serialize_post
from ..models.user import CurrentUser
from ..store.posts import PostStore
from ..validation.post import validate_post_input

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/posts", tags=["posts"])


def get_post_store(db=Depends(get_db)) -> PostStore:
    return PostStore(db)


def read_post_input(body: Optional[Dict[str, Any]], current_user: CurrentUser) -> PostInput:
    body = body or {}
    errors, is_valid = validate_post_input(body)
    if not is_valid:
        raise PostValidationError(errors)
    name = body.get("name")
    avatar = body.get("avatar")
    return PostInput(
        text=body["text"],
        name=name if name is not None else current_user.name or "",
        avatar=avatar if avatar is not None else current_user.avatar or "",
    )


@router.get("/test")
def test_route():
    return {"msg": "posts works"}


@router.get("/", response_model=List[PostOut])
def get_posts(store: PostStore = Depends(get_post_store)):
    try:
        posts = store.list_posts()
    except ExecutionTimeout:
        # Timeouts are a storage outage, not an empty listing
        raise
    except OperationFailure as e:
        logger.error("Listing posts failed: %s", e)
        raise NotFound("nopostsfound", "No posts found")
    return [serialize_post(post) for post in posts]


@router.get("/{post_id}", response_model=PostOut)
def get_post(post_id: str, store: PostStore = Depends(get_post_store)):
    return serialize_post(store.get_post(post_id))


@router.post("/", response_model=PostOut)
def create_post(
    body: Optional[Dict[str, Any]] = Body(None),
    current_user: CurrentUser = Depends(get_current_user),
    store: PostStore = Depends(get_post_store),
):
    data = read_post_input(body, current_user)
    return serialize_post(store.create_post(current_user.id, data))


# --- Like/Unlike Posts ---
@router.post("/like/{post_id}", response_model=PostOut)
def toggle_like(
    post_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    store: PostStore = Depends(get_post_store),
):
    return serialize_post(store.toggle_like(current_user.id, post_id))


# --- Post Deletion ---
@router.delete("/{post_id}")
def delete_post(
    post_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    store: PostStore = Depends(get_post_store),
):
    store.delete_post(current_user.id, post_id)
    return {"post": "post deleted"}


# --- Comments ---
@router.post("/comment/{post_id}", response_model=PostOut)
def add_comment(
    post_id: str,
    body: Optional[Dict[str, Any]] = Body(None),
    current_user: CurrentUser = Depends(get_current_user),
    store: PostStore = Depends(get_post_store),
):
    data = read_post_input(body, current_user)
    return serialize_post(store.add_comment(current_user.id, post_id, data))


@router.delete("/comment/{post_id}/{comment_id}")
def delete_comment(
    post_id: str,
    comment_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    store: PostStore = Depends(get_post_store),
):
    store.remove_comment(current_user.id, post_id, comment_id)
    return {"msg": "Comment Deleted"}
