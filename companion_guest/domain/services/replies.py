"""
体験チャット用の定型応答

ゲスト体験ではAIサービスを呼ばず、性格ごとの定型文から応答を選ぶ。
"""

import random

from ..models.companion import Personality, TempCompanion

CANNED_REPLIES: dict[Personality, tuple[str, ...]] = {
    Personality.GENTLE: (
        "我能理解你的感受呢～",
        "听起来很有趣，能告诉我更多吗？",
        "你真的很棒呢！💕",
        "我觉得你说得很有道理～",
        "谢谢你愿意和我分享这些",
    ),
    Personality.LIVELY: (
        "哇！这听起来超棒的！✨",
        "我也想试试呢！",
        "你真的很有意思！",
        "这让我想到了...",
        "我们聊得好开心啊！",
    ),
    Personality.INTELLECTUAL: (
        "这是一个很深刻的观点",
        "从另一个角度来看...",
        "你的想法很有启发性",
        "这让我思考了很多",
        "我们可以深入探讨一下",
    ),
}


class CannedReplyGenerator:
    """性格別の定型応答ジェネレーター"""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def generate(self, companion: TempCompanion) -> str:
        replies = CANNED_REPLIES.get(companion.personality, CANNED_REPLIES[Personality.GENTLE])
        return self._rng.choice(replies)
