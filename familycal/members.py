from __future__ import annotations

import logging
import random
from typing import Dict, Optional

from sqlmodel import Field, Session, SQLModel, select

from .colors import canonical_color
from .palette import next_available_color


logger = logging.getLogger(__name__)


class MemberColor(SQLModel, table=True):
    """Color assigned to a family member.

    ``member_id`` is owned by the member-management side of the application.
    """

    member_id: str = Field(primary_key=True)
    color: str


class MemberColorStore:
    """CRUD helper for :class:`MemberColor` objects.

    Assignments are only ever created or overwritten here; removing a member
    is the job of whoever owns the member record.
    """

    def __init__(self, engine):
        self.engine = engine

    def get(self, member_id: str) -> Optional[str]:
        with Session(self.engine) as session:
            assignment = session.get(MemberColor, member_id)
            return assignment.color if assignment else None

    def list_colors(self) -> Dict[str, str]:
        with Session(self.engine) as session:
            rows = session.exec(select(MemberColor)).all()
            return {row.member_id: row.color for row in rows}

    def assign(self, member_id: str, rng: random.Random | None = None) -> str:
        """Return the member's color, allocating the next free one if needed."""
        with Session(self.engine) as session:
            existing = session.get(MemberColor, member_id)
            if existing:
                return existing.color
            used = session.exec(select(MemberColor.color)).all()
            color = next_available_color(used, rng=rng)
            session.add(MemberColor(member_id=member_id, color=color))
            session.commit()
            logger.info("Assigned color %s to member %s", color, member_id)
            return color

    def set_color(self, member_id: str, color: str) -> str:
        """Store an explicitly chosen color for ``member_id``.

        Raises ``ValueError`` if ``color`` is not a ``#RRGGBB`` hex string.
        """
        canonical = canonical_color(color)
        if canonical is None:
            raise ValueError(f"Invalid color: {color!r}")
        with Session(self.engine) as session:
            assignment = session.get(MemberColor, member_id)
            if assignment:
                assignment.color = canonical
            else:
                assignment = MemberColor(member_id=member_id, color=canonical)
            session.add(assignment)
            session.commit()
            return canonical
