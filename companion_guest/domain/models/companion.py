"""
体験用コンパニオンモデル
ゲスト体験で使う3種類のプリセットコンパニオンを定義
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Personality(Enum):
    """コンパニオンの性格タイプ"""
    GENTLE = "gentle"               # 優しい
    LIVELY = "lively"               # 元気
    INTELLECTUAL = "intellectual"   # 知的


@dataclass(frozen=True)
class TempCompanion:
    """体験用コンパニオン（セッション中は不変）"""
    id: str
    name: str
    personality: Personality
    avatar: str
    backstory: str
    traits: tuple[str, ...]
    greeting: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "personality": self.personality.value,
            "avatar": self.avatar,
            "backstory": self.backstory,
            "traits": list(self.traits),
            "greeting": self.greeting,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TempCompanion":
        return cls(
            id=data["id"],
            name=data["name"],
            personality=Personality(data["personality"]),
            avatar=data["avatar"],
            backstory=data["backstory"],
            traits=tuple(data["traits"]),
            greeting=data["greeting"],
        )


TEMP_COMPANION_TEMPLATES: tuple[TempCompanion, ...] = (
    TempCompanion(
        id="temp-gentle",
        name="小雨",
        personality=Personality.GENTLE,
        avatar="/images/presets/temp-gentle.jpg",
        backstory="温柔体贴的邻家女孩，喜欢安静的午后和温暖的对话",
        traits=("温柔", "体贴", "善解人意", "细心"),
        greeting="你好呀～我是小雨，很高兴遇见你！今天过得怎么样？💕",
    ),
    TempCompanion(
        id="temp-lively",
        name="小晴",
        personality=Personality.LIVELY,
        avatar="/images/presets/temp-lively.jpg",
        backstory="活泼开朗的阳光女孩，总是充满正能量和好奇心",
        traits=("活泼", "开朗", "好奇", "热情"),
        greeting="嗨！我是小晴～超级开心认识你！我们来聊点有趣的吧！✨",
    ),
    TempCompanion(
        id="temp-intellectual",
        name="小书",
        personality=Personality.INTELLECTUAL,
        avatar="/images/presets/temp-intellectual.jpg",
        backstory="知性优雅的文艺女孩，喜欢深度思考和有意义的交流",
        traits=("知性", "优雅", "理性", "深刻"),
        greeting="你好，我是小书。很高兴能与你进行一场有深度的对话 📚",
    ),
)
