"""Persistence helpers for tags."""

from __future__ import annotations

from sqlalchemy.orm import Session

from pfm_simulator.domain.entities import Tag
from pfm_simulator.infrastructure.models import TagModel
from pfm_simulator.utils import ensure_app_timezone


class TagRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert(self, tag: Tag) -> Tag:
        """Overwrite the tag sharing ``tag.id``; insert a new row when it has none."""

        model = self.session.get(TagModel, tag.id) if tag.id is not None else None
        if model is None:
            model = TagModel()
            if tag.id is not None:
                model.id = tag.id
            self.session.add(model)
        model.partner_id = tag.partner_id
        model.user_id = tag.user_id
        model.name = tag.name
        model.parent_tag_id = tag.parent_tag_id
        model.tag_type = tag.tag_type
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_user(self, user_id: int) -> list[Tag]:
        query = (
            self.session.query(TagModel)
            .filter(TagModel.user_id == user_id)
            .order_by(TagModel.name.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: TagModel) -> Tag:
        return Tag(
            id=model.id,
            partner_id=model.partner_id,
            name=model.name,
            user_id=model.user_id,
            parent_tag_id=model.parent_tag_id,
            tag_type=model.tag_type,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["TagRepository"]
