from pydantic import BaseModel, Field
from typing import List
from datetime import datetime


class LikeOut(BaseModel):
    user: str


class CommentOut(BaseModel):
    id: str
    text: str
    name: str = ""
    avatar: str = ""
    user: str
    date: datetime


class PostOut(BaseModel):
    id: str
    text: str
    name: str = ""
    avatar: str = ""
    user: str
    date: datetime
    likes: List[LikeOut] = Field(default_factory=list)
    comments: List[CommentOut] = Field(default_factory=list)


class PostInput(BaseModel):
    """Fields accepted for both posts and comments, after validation."""
    text: str
    name: str = ""
    avatar: str = ""


def serialize_comment(comment: dict) -> CommentOut:
    return CommentOut(
        id=str(comment["_id"]),
        text=comment["text"],
        name=comment.get("name") or "",
        avatar=comment.get("avatar") or "",
        user=comment["user"],
        date=comment["date"],
    )


def serialize_post(post: dict) -> PostOut:
    return PostOut(
        id=str(post["_id"]),
        text=post["text"],
        name=post.get("name") or "",
        avatar=post.get("avatar") or "",
        user=post["user"],
        date=post["date"],
        likes=[LikeOut(user=like["user"]) for like in post.get("likes", [])],
        comments=[serialize_comment(c) for c in post.get("comments", [])],
    )
