"""
Moderation routes shared by every moderated model.
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Literal, Optional, Type

from ..auth import get_current_user, get_moderation_db, get_required_moderator
from ..behavior import ModerationController, resolve_options
from ..config import get_settings
from ..database import get_db
from ..logging_config import api_logger
from ..models.user import User
from ..query import ModerationQuery
from ..schemas.moderation import ModerationResult, StatusLabel
from ..status import Status

settings = get_settings()

StatusFilter = Literal["approved", "rejected", "postponed", "pending", "approved_with_pending"]

# path suffix -> target status
ACTIONS = {
    "approve": Status.APPROVED,
    "reject": Status.REJECTED,
    "postpone": Status.POSTPONED,
    "pending": Status.PENDING,
}

statuses_router = APIRouter(prefix="/api/statuses", tags=["moderation"])


@statuses_router.get("", response_model=List[StatusLabel])
def list_statuses(locale: str = "en"):
    """List every moderation status with its display label."""
    return [
        StatusLabel(code=int(s), name=s.name.lower(), label=s.localized(locale))
        for s in Status
    ]


def build_moderation_router(model: Type, prefix: str, response_model, tags: Optional[List[str]] = None) -> APIRouter:
    """
    Build list, detail and moderation action routes for ``model``.

    Non-moderators only ever see approved records. Moderation actions
    answer 409 when the change is vetoed or cannot be saved.
    """
    options = resolve_options(model).options
    router = APIRouter(prefix=prefix, tags=tags or ["moderation"])
    name = model.__name__

    def load(record_id: int, db: Session):
        record = db.get(model, record_id)
        if record is None:
            raise HTTPException(status_code=404, detail=f"{name} not found")
        return record

    @router.get("", response_model=List[response_model])
    def list_records(
        status: Optional[StatusFilter] = None,
        limit: int = Query(settings.page_size, ge=1, le=500),
        offset: int = Query(0, ge=0),
        db: Session = Depends(get_db),
        current_user: Optional[User] = Depends(get_current_user),
    ):
        """List records, optionally narrowed to a moderation status."""
        query = ModerationQuery.for_model(db, model)
        if current_user is None or not current_user.is_moderator:
            query = query.approved()
        elif status:
            query = getattr(query, status)()
        return query.order_by(model.id).offset(offset).limit(limit).all()

    @router.get("/{record_id}", response_model=response_model)
    def get_record(
        record_id: int,
        db: Session = Depends(get_db),
        current_user: Optional[User] = Depends(get_current_user),
    ):
        """Get a single record; unapproved ones are visible to moderators only."""
        record = load(record_id, db)
        if not record.is_approved() and (current_user is None or not current_user.is_moderator):
            raise HTTPException(status_code=404, detail=f"{name} not found")
        return record

    def add_action(action: str, target: Status):
        method_name = f"mark_{target.name.lower()}"

        def moderate(
            record_id: int,
            db: Session = Depends(get_moderation_db),
            current_user: User = Depends(get_required_moderator),
        ):
            record = load(record_id, db)
            controller = ModerationController(record, db)
            if not getattr(controller, method_name)():
                api_logger.warning(
                    f"{name} moderation refused",
                    record_id=record_id,
                    action=action,
                    moderator_id=current_user.id,
                )
                raise HTTPException(status_code=409, detail=f"{name} could not be moderated")

            db.refresh(record)
            moderated_by = None
            if options.moderated_by_attribute is not None:
                moderated_by = getattr(record, options.moderated_by_attribute)
            return ModerationResult(
                id=record_id,
                status=int(controller.status),
                status_label=controller.status.label,
                moderated_by=moderated_by,
            )

        moderate.__name__ = f"{action}_{name.lower()}"
        moderate.__doc__ = f"Mark a {name.lower()} as {target.label}."
        router.add_api_route(f"/{{record_id}}/{action}", moderate, methods=["POST"], response_model=ModerationResult)

    for action, target in ACTIONS.items():
        add_action(action, target)

    return router
