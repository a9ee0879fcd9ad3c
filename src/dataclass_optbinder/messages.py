"""Presentation-neutral message values handed to the caller's output layer."""

import dataclasses
import enum


class MsgStyle(enum.Enum):
    PLAIN = "plain"
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"


@dataclasses.dataclass(frozen=True)
class StyledMessage:
    """A block of text plus the style the presentation layer should apply."""

    text: str
    style: MsgStyle = MsgStyle.PLAIN

    def __str__(self) -> str:
        return self.text
