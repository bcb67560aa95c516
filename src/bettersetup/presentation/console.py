from __future__ import annotations

import re
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from bettersetup.bootstrap import Runtime
from bettersetup.domain.models.character import Character, ChatType


CHAT_CHOICES = ("say", "yell", "whisper", "party", "raid", "guild", "channel")
_COLOR_CODE = re.compile(r"\|c[0-9a-fA-F]{8}|\|r")
_REPLY_BORDER = "green"
_ERROR_BORDER = "red"
_QUIT_WORDS = {"quit", "exit"}


def strip_color_codes(text: str) -> str:
    return _COLOR_CODE.sub("", str(text or ""))


class ChatConsole:
    """Drives one sender's chat against the demo host and renders the replies."""

    def __init__(
        self,
        runtime: Runtime,
        *,
        sender_name: str,
        chat: str = "party",
        target_name: str | None = None,
        channel_name: str = "general",
        console: Console | None = None,
    ) -> None:
        self._runtime = runtime
        self._console = console or Console()
        self._sender = self._lookup(sender_name)
        if chat not in CHAT_CHOICES:
            raise ValueError(f"Unsupported chat path: {chat}")
        self._chat = chat
        self._target = self._lookup(target_name) if target_name else None
        self._channel = runtime.host.channels.get(channel_name.lower())
        if chat == "channel" and self._channel is None:
            raise ValueError(f"Unknown channel: {channel_name}")

    @property
    def sender(self) -> Character:
        return self._sender

    def _lookup(self, name: str) -> Character:
        character = self._runtime.host.directory.find_by_name(name)
        if character is None:
            raise ValueError(f"Unknown character: {name}")
        return character

    def _drain_replies(self) -> List[str]:
        notifier = self._runtime.host.notifier
        replies = [strip_color_codes(text) for text in notifier.messages_for(self._sender)]
        notifier.clear()
        return replies

    def _render(self, title: str, lines: List[str], *, border: str = _REPLY_BORDER) -> None:
        body = "\n".join(escape(line) for line in lines) if lines else "[dim](no reply)[/dim]"
        self._console.print(Panel.fit(body, title=f"[bold]{escape(title)}[/bold]", border_style=border))

    def login(self) -> List[str]:
        self._runtime.login_diagnostics.send(self._sender)
        lines = self._drain_replies()
        if lines:
            self._render(f"Login: {self._sender.name}", lines)
        return lines

    def send(self, message: str) -> List[str]:
        service = self._runtime.spec_service
        chat_type = ChatType(self._chat)
        kwargs = {}
        if chat_type is ChatType.WHISPER:
            kwargs["receiver"] = self._target
        elif chat_type in (ChatType.PARTY, ChatType.RAID):
            kwargs["group_id"] = self._runtime.host.group_id
        elif chat_type is ChatType.CHANNEL:
            kwargs["channel"] = self._channel

        service.handle_chat(self._sender, message, chat_type, **kwargs)
        lines = self._drain_replies()
        self._render(f"{self._sender.name} [{self._chat}] {message}", lines)
        return lines

    def report_error(self, exc: Exception) -> None:
        self._render("Error", [str(exc)], border=_ERROR_BORDER)

    def run_interactive(self, read_line: Optional[Callable[[str], str]] = None) -> None:
        read_line = read_line or self._console.input
        while True:
            try:
                message = read_line(f"{self._sender.name}> ")
            except EOFError:
                return
            if message.strip().lower() in _QUIT_WORDS:
                return
            if not message.strip():
                continue
            self.send(message)
