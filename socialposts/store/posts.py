import logging
from datetime import datetime
from typing import List, Optional

from bson.objectid import ObjectId
from pymongo import DESCENDING, ReturnDocument

from .. import config
from ..errors import Conflict, Forbidden, NotFound, Unauthorized
from ..models.post import PostInput

logger = logging.getLogger(__name__)


def parse_object_id(value: str) -> Optional[ObjectId]:
    if not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def post_not_found() -> NotFound:
    return NotFound("postnotfound", "No post found")


class PostStore:
    """
    Reads and writes the ``posts`` collection.

    Every mutation is a single conditional update against one document, so
    concurrent requests on the same post never lose each other's likes or
    comments.
    """

    def __init__(self, db):
        self.posts = db.posts

    def _post_id(self, post_id: str) -> ObjectId:
        oid = parse_object_id(post_id)
        if oid is None:
            raise post_not_found()
        return oid

    def list_posts(self) -> List[dict]:
        return list(self.posts.find().sort("date", DESCENDING))

    def get_post(self, post_id: str) -> dict:
        oid = parse_object_id(post_id)
        post = self.posts.find_one({"_id": oid}) if oid else None
        if not post:
            raise NotFound("nopostfound", "No post found with that ID")
        return post

    def create_post(self, user_id: str, data: PostInput) -> dict:
        post = {
            "text": data.text,
            "name": data.name,
            "avatar": data.avatar,
            "user": user_id,
            "date": datetime.utcnow(),
            "likes": [],
            "comments": [],
        }
        result = self.posts.insert_one(post)
        post["_id"] = result.inserted_id
        logger.debug("User %s created post %s", user_id, result.inserted_id)
        return post

    def toggle_like(self, user_id: str, post_id: str) -> dict:
        oid = self._post_id(post_id)
        like = {"user": user_id}

        for _ in range(config.LIKE_TOGGLE_ATTEMPTS):
            # Remove only if present, add only if absent
            result = self.posts.update_one({"_id": oid, "likes": like}, {"$pull": {"likes": like}})
            if result.matched_count:
                logger.debug("User %s unliked post %s", user_id, post_id)
                break
            result = self.posts.update_one({"_id": oid}, {"$addToSet": {"likes": like}})
            if not result.matched_count:
                raise post_not_found()
            if result.modified_count:
                logger.debug("User %s liked post %s", user_id, post_id)
                break
        else:
            logger.warning("Like toggle on post %s by %s kept racing, giving up", post_id, user_id)
            raise Conflict("msg", "Post was modified concurrently, try again")

        post = self.posts.find_one({"_id": oid})
        if not post:
            raise post_not_found()
        return post

    def delete_post(self, user_id: str, post_id: str):
        oid = self._post_id(post_id)
        result = self.posts.delete_one({"_id": oid, "user": user_id})
        if result.deleted_count:
            logger.debug("User %s deleted post %s", user_id, post_id)
            return
        if self.posts.find_one({"_id": oid}, {"_id": 1}) is None:
            raise post_not_found()
        raise Forbidden("notauthorized", "User not authorized to delete this post")

    def add_comment(self, user_id: str, post_id: str, data: PostInput) -> dict:
        oid = self._post_id(post_id)
        comment = {
            "_id": ObjectId(),
            "text": data.text,
            "name": data.name,
            "avatar": data.avatar,
            "user": user_id,
            "date": datetime.utcnow(),
        }
        post = self.posts.find_one_and_update(
            {"_id": oid},
            {"$push": {"comments": {"$each": [comment], "$position": 0}}},
            return_document=ReturnDocument.AFTER,
        )
        if not post:
            raise post_not_found()
        logger.debug("User %s commented %s on post %s", user_id, comment["_id"], post_id)
        return post

    def remove_comment(self, user_id: str, post_id: str, comment_id: str):
        oid = self._post_id(post_id)
        cid = parse_object_id(comment_id)
        if cid is not None:
            match = {"_id": cid, "user": user_id}
            result = self.posts.update_one(
                {"_id": oid, "comments": {"$elemMatch": match}},
                {"$pull": {"comments": match}},
            )
            if result.matched_count:
                logger.debug("User %s removed comment %s from post %s", user_id, comment_id, post_id)
                return
        if self.posts.find_one({"_id": oid}, {"_id": 1}) is None:
            raise post_not_found()
        # Missing comment and someone else's comment look the same to the caller
        raise Unauthorized("msg", "You are not authorized to perform this action")
