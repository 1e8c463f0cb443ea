"""
ゲストメッセージモデル
"""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


def parse_timestamp(value: Any) -> datetime:
    """
    保存値から datetime を復元

    ISO-8601 文字列、またはエポックミリ秒の数値を受け付ける。
    タイムゾーン付きの値はローカル時刻（naive）に揃える。
    """
    if isinstance(value, bool):
        raise TypeError(f"invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise ValueError(f"invalid timestamp: {value!r}")
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError) as e:
            raise ValueError(f"timestamp out of range: {value!r}") from e
    if not isinstance(value, str):
        raise TypeError(f"invalid timestamp: {value!r}")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


class Sender(Enum):
    """送信者"""
    USER = "user"
    COMPANION = "companion"


@dataclass
class GuestMessage:
    """体験チャットの個別メッセージ"""
    id: str
    content: str
    sender: Sender
    timestamp: datetime
    emotion: str | None = None

    @property
    def is_user(self) -> bool:
        return self.sender is Sender.USER

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "content": self.content,
            "sender": self.sender.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.emotion is not None:
            data["emotion"] = self.emotion
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GuestMessage":
        return cls(
            id=data["id"],
            content=data["content"],
            sender=Sender(data["sender"]),
            timestamp=parse_timestamp(data["timestamp"]),
            emotion=data.get("emotion"),
        )
