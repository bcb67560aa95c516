import logging
import os
import socket
from dataclasses import dataclass
from urllib.parse import urlparse

from bettersetup.application.services.audit_log import register_audit_log_handlers
from bettersetup.application.services.event_bus import EventBus
from bettersetup.application.services.login_diagnostics import LoginDiagnosticsService
from bettersetup.application.services.spec_command_service import SpecCommandService
from bettersetup.domain.repositories import CharacterSettingsRepository, ConfigStore
from bettersetup.domain.services.random_source import SeededRandomSource
from bettersetup.infrastructure.config.env_config_store import EnvConfigStore
from bettersetup.infrastructure.inmemory.demo_roster import DemoHost, build_demo_host


_LOGGER = logging.getLogger(__name__)


@dataclass
class Runtime:
    host: DemoHost
    event_bus: EventBus
    spec_service: SpecCommandService
    login_diagnostics: LoginDiagnosticsService


def _looks_like_local_mysql_unreachable(database_url: str) -> bool:
    if not database_url:
        return False

    parsed = urlparse(database_url)
    if not parsed.scheme.startswith("mysql"):
        return False

    host = (parsed.hostname or "").strip().lower()
    if host not in {"localhost", "127.0.0.1", "::1"}:
        return False

    port = parsed.port or 3306
    timeout = float(os.getenv("BETTERSETUP_DB_CONNECT_PROBE_TIMEOUT_S", "0.35"))

    try:
        with socket.create_connection((host, port), timeout=timeout):
            return False
    except OSError:
        return True


def _build_settings_repository(fallback: CharacterSettingsRepository) -> CharacterSettingsRepository:
    database_url = os.getenv("BETTERSETUP_DATABASE_URL")
    if not database_url:
        return fallback
    if _looks_like_local_mysql_unreachable(database_url):
        print("MySQL appears unreachable, using in-memory character settings.")
        return fallback
    try:
        from bettersetup.infrastructure.db.mysql.repos import MysqlCharacterSettingsRepository

        return MysqlCharacterSettingsRepository()
    except Exception as exc:  # pragma: no cover - best-effort fallback
        print(f"MySQL unavailable, using in-memory character settings. Reason: {exc}")
        return fallback


def create_runtime(config_store: ConfigStore | None = None, *, seed: int | None = None) -> Runtime:
    config_store = config_store or EnvConfigStore()
    host = build_demo_host()
    settings_repo = _build_settings_repository(host.settings_repo)

    event_bus = EventBus()
    register_audit_log_handlers(event_bus)

    spec_service = SpecCommandService(
        config_store=config_store,
        directory=host.directory,
        factory=host.factory,
        templates=host.templates,
        settings_repo=settings_repo,
        notifier=host.notifier,
        random_source=SeededRandomSource(seed),
        event_publisher=event_bus.publish,
    )
    login_diagnostics = LoginDiagnosticsService(
        config_store=config_store,
        settings_repo=settings_repo,
        factory=host.factory,
        notifier=host.notifier,
    )
    _LOGGER.debug("Runtime ready", extra={"settings_repo": type(settings_repo).__name__})
    return Runtime(
        host=host,
        event_bus=event_bus,
        spec_service=spec_service,
        login_diagnostics=login_diagnostics,
    )
