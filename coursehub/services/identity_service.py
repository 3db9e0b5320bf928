# coursehub/services/identity_service.py
import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from coursehub.models.user_model import ClerkUserData
from coursehub.repositories.progress_repository import ProgressRepository
from coursehub.repositories.user_repository import UserRepository
from coursehub.services.rating_service import RatingService


class IdentitySyncService:
    """
    Applies identity-provider lifecycle events to the users collection.
    Every handler returns (http_status, body).
    """

    def __init__(
        self,
        users: Optional[UserRepository] = None,
        progress: Optional[ProgressRepository] = None,
        ratings: Optional[RatingService] = None,
    ):
        self.users = users or UserRepository()
        self.progress = progress or ProgressRepository()
        self.ratings = ratings or RatingService(users=self.users)

    def handle(self, event_type: str, data: Dict[str, Any]) -> Tuple[int, Dict[str, Any]]:
        handlers = {
            "user.created": self.user_created,
            "user.updated": self.user_updated,
            "user.deleted": self.user_deleted,
        }
        handler = handlers.get(event_type)
        if handler is None:
            logging.warning(f"[identity] unhandled event type: {event_type}")
            return 400, {"success": False, "message": "Unhandled event type"}
        return handler(data)

    def user_created(self, data: Dict[str, Any]) -> Tuple[int, Dict[str, Any]]:
        try:
            payload = ClerkUserData.model_validate(data)
        except ValidationError:
            return 400, {"success": False, "message": "Invalid user payload"}

        if self.users.exists(payload.id):
            logging.info(f"[identity] user already exists: {payload.id}")
            return 200, {"success": True, "message": "User already exists"}

        profile = payload.profile()
        profile["name"] = profile["name"] or "User"
        user = self.users.create({"_id": payload.id, **profile})
        logging.info(f"[identity] user created: {payload.id}")
        return 201, {"success": True, "message": "User created", "user": user}

    def user_updated(self, data: Dict[str, Any]) -> Tuple[int, Dict[str, Any]]:
        try:
            payload = ClerkUserData.model_validate(data)
        except ValidationError:
            return 400, {"success": False, "message": "Invalid user payload"}

        self.users.update_profile(payload.id, payload.profile())
        logging.info(f"[identity] user updated: {payload.id}")
        return 200, {"success": True, "message": "User updated"}

    def user_deleted(self, data: Dict[str, Any]) -> Tuple[int, Dict[str, Any]]:
        user_id = data.get("id")
        if not user_id:
            return 400, {"success": False, "message": "Invalid user payload"}

        self.users.delete(user_id)
        # progress and ratings go with the user; purchases stay as ledger history
        removed_progress = self.progress.delete_for_user(user_id)
        removed_ratings = self.ratings.remove_user_ratings(user_id)
        logging.info(
            f"[identity] user deleted: {user_id} (progress={removed_progress}, ratings={removed_ratings})"
        )
        return 200, {"success": True, "message": "User deleted"}
