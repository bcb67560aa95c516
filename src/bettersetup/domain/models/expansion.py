from __future__ import annotations

from enum import IntEnum


class ExpansionCap(IntEnum):
    VANILLA = 0
    TBC = 1
    WRATH = 2

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def supports_glyphs(self) -> bool:
        return self is ExpansionCap.WRATH


_LABELS = {
    ExpansionCap.VANILLA: "Vanilla",
    ExpansionCap.TBC: "TBC",
    ExpansionCap.WRATH: "Wrath",
}
