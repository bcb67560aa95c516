import sys
from pathlib import Path
import unittest
from unittest import mock

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from bettersetup.domain.services.expansion_cap import PROGRESSION_SETTING_NAMESPACE
from bettersetup.infrastructure.db.mysql import repos as mysql_repos
from bettersetup.infrastructure.db.mysql.repos import MysqlCharacterSettingsRepository, parse_setting_value


def _bootstrap_schema(engine) -> None:
    with engine.begin() as conn:
        conn.execute(
            text(
                """
                CREATE TABLE character_settings (
                    guid INTEGER NOT NULL,
                    source TEXT NOT NULL,
                    data TEXT,
                    PRIMARY KEY (guid, source)
                )
                """
            )
        )
        conn.execute(
            text("INSERT INTO character_settings (guid, source, data) VALUES (:guid, :source, :data)"),
            [
                {"guid": 7, "source": PROGRESSION_SETTING_NAMESPACE, "data": "12 5 0"},
                {"guid": 8, "source": PROGRESSION_SETTING_NAMESPACE, "data": "pending"},
                {"guid": 9, "source": PROGRESSION_SETTING_NAMESPACE, "data": ""},
                {"guid": 7, "source": "mod-other", "data": "3"},
            ],
        )


class MysqlCharacterSettingsRepositoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        _bootstrap_schema(self.engine)
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False)

    def test_reads_leading_integer_for_namespace(self) -> None:
        with mock.patch.object(mysql_repos, "SessionLocal", self.session_factory):
            repo = MysqlCharacterSettingsRepository()
            self.assertEqual(12, repo.read_setting(7, PROGRESSION_SETTING_NAMESPACE))
            self.assertEqual(3, repo.read_setting(7, "mod-other"))

    def test_missing_or_malformed_rows_are_absent(self) -> None:
        with mock.patch.object(mysql_repos, "SessionLocal", self.session_factory):
            repo = MysqlCharacterSettingsRepository()
            self.assertIsNone(repo.read_setting(8, PROGRESSION_SETTING_NAMESPACE))
            self.assertIsNone(repo.read_setting(9, PROGRESSION_SETTING_NAMESPACE))
            self.assertIsNone(repo.read_setting(99, PROGRESSION_SETTING_NAMESPACE))

    def test_database_errors_are_logged_and_treated_as_absent(self) -> None:
        broken_engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        broken_factory = sessionmaker(bind=broken_engine)
        with mock.patch.object(mysql_repos, "SessionLocal", broken_factory):
            repo = MysqlCharacterSettingsRepository()
            with self.assertLogs("bettersetup.infrastructure.db.mysql.repos", level="ERROR"):
                self.assertIsNone(repo.read_setting(7, PROGRESSION_SETTING_NAMESPACE))

    def test_parse_setting_value(self) -> None:
        self.assertEqual(14, parse_setting_value(b"14 1"))
        self.assertEqual(0, parse_setting_value("0"))
        self.assertIsNone(parse_setting_value(None))
        self.assertIsNone(parse_setting_value("-1"))


if __name__ == "__main__":
    unittest.main()
