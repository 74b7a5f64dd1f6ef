from __future__ import annotations

import logging

from sqlmodel import Field, Session, SQLModel

from .colors import canonical_color
from .palette import FAMILY_EVENT_COLOR


logger = logging.getLogger(__name__)

FAMILY_COLOR_KEY = "family_event_color"


class Setting(SQLModel, table=True):
    key: str = Field(primary_key=True)
    value: str


class SettingsStore:
    """CRUD helper for :class:`Setting` objects."""

    def __init__(self, engine):
        self.engine = engine

    def get_family_color(self) -> str:
        with Session(self.engine) as session:
            setting = session.get(Setting, FAMILY_COLOR_KEY)
            if not setting:
                return FAMILY_EVENT_COLOR

            # Values written by hand or by older versions may not parse.
            # Reset them so every screen agrees on the family color.
            if canonical_color(setting.value) is None:
                logger.warning(
                    "Stored family color %r is invalid; resetting to %s",
                    setting.value,
                    FAMILY_EVENT_COLOR,
                )
                session.delete(setting)
                session.commit()
                return FAMILY_EVENT_COLOR

            return setting.value

    def set_family_color(self, color: str) -> str:
        canonical = canonical_color(color)
        if canonical is None:
            raise ValueError(f"Invalid color: {color!r}")
        with Session(self.engine) as session:
            setting = session.get(Setting, FAMILY_COLOR_KEY)
            if setting:
                setting.value = canonical
            else:
                setting = Setting(key=FAMILY_COLOR_KEY, value=canonical)
            session.add(setting)
            session.commit()
            return canonical
