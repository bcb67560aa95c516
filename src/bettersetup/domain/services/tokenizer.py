from __future__ import annotations

from collections.abc import Iterator, Sequence


def normalize_token(value: str | None) -> str:
    return "".join(ch.lower() for ch in str(value or "") if ch.isascii() and ch.isalnum())


def trim(value: str | None) -> str:
    return str(value or "").strip()


def split_commands(text: str, separator: str) -> list[str]:
    if not separator:
        return [text]
    return text.split(separator)


def split_words(text: str) -> list[str]:
    return str(text or "").split()


def join_words(words: Sequence[str], from_index: int) -> str:
    if from_index >= len(words):
        return ""
    return " ".join(words[from_index:])


def strip_command_prefix(command: str, prefix: str) -> str | None:
    """Apply the command prefix gate to one trimmed command.

    Returns None when the command does not carry the prefix or nothing is left
    after stripping it.
    """
    if not prefix:
        return command or None
    if not command.startswith(prefix):
        return None
    stripped = trim(command[len(prefix):])
    return stripped or None


def iter_gated_commands(message: str, *, separator: str, prefix: str) -> Iterator[str]:
    for raw in split_commands(message, separator):
        command = trim(raw)
        if not command:
            continue
        gated = strip_command_prefix(command, prefix)
        if gated is None:
            continue
        yield gated
