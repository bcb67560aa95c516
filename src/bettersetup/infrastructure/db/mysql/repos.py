import logging
import re
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bettersetup.domain.repositories import CharacterSettingsRepository
from .connection import SessionLocal


_LEADING_UINT = re.compile(r"^\s*(\d+)")
_LOGGER = logging.getLogger(__name__)


def parse_setting_value(raw_value) -> Optional[int]:
    """Leading unsigned integer of a ``character_settings.data`` blob."""
    if raw_value is None:
        return None
    if isinstance(raw_value, (bytes, bytearray)):
        raw_value = raw_value.decode("utf-8", errors="ignore")
    match = _LEADING_UINT.match(str(raw_value))
    if match is None:
        return None
    return int(match.group(1))


class MysqlCharacterSettingsRepository(CharacterSettingsRepository):
    def read_setting(self, character_id: int, namespace: str) -> Optional[int]:
        try:
            with SessionLocal() as session:
                row = session.execute(
                    text(
                        """
                        SELECT data
                        FROM character_settings
                        WHERE guid = :guid AND source = :source
                        LIMIT 1
                        """
                    ),
                    {"guid": int(character_id), "source": str(namespace)},
                ).first()
        except SQLAlchemyError:
            _LOGGER.exception(
                "Character settings lookup failed; treating as absent",
                extra={"character_id": character_id, "namespace": namespace},
            )
            return None

        if row is None:
            return None
        return parse_setting_value(row.data)
