"""
Shared Domain Constants.

Central location for the note grammar markers, the SRS interval ladder
and user-facing messages.
"""

# =============================================================================
# Spaced Repetition
# =============================================================================
# Index = review level. Levels beyond the ladder reuse the last interval.

SRS_INTERVALS_DAYS: tuple[int, ...] = (1, 3, 7, 14, 30, 90, 180, 365)
RELEARN_DELAY_MINUTES = 10  # AGAIN puts the card back in the queue soon


# =============================================================================
# Note Sections
# =============================================================================

COMPLEX_SECTION_MARKER = "重要俚语/习惯用语/短语"
SIMPLE_SECTION_MARKER = "简单常见表达"
SIMPLE_ENTRY_SEPARATOR = " - "
TITLE_PREFIX = "标题："


# =============================================================================
# Complex Entry Labels (fixed order)
# =============================================================================

MEANING_LABEL = "意思解释："
EXAMPLE_LABEL = "在文中的句子："
CONTEXT_LABEL = "简要文化背景或用法说明："
TRANSLATION_LABEL = "翻译这句话的意思："

FIELD_LABELS: tuple[tuple[str, str], ...] = (
    ("meaning", MEANING_LABEL),
    ("example", EXAMPLE_LABEL),
    ("context", CONTEXT_LABEL),
    ("translation", TRANSLATION_LABEL),
)


# =============================================================================
# Assistant
# =============================================================================

EXAMPLE_PROMPT_TEMPLATE = (
    'For the English term "{term}" which means "{meaning}", '
    "provide 3 diverse and natural example sentences."
)


# =============================================================================
# User Messages (Single Source of Truth)
# =============================================================================


class Messages:
    """Centralized notification messages shown to the learner."""

    PREVIEW_SUCCESS = "成功生成 {count} 张预览卡片！"
    PREVIEW_FAILED = "解析失败，未提取到卡片。"
    DECK_SAVED = '卡组 "{title}" 保存成功！'
    NOTHING_TO_SAVE = "没有可以保存的卡片！"
    DECK_UPDATED = "卡组已成功更新！"
    DECK_DELETED = "卡组已删除"
    NOTHING_DUE = "太棒了！这个卡组今天没有需要复习的卡片。"
    REVIEW_COMPLETE = "恭喜！已完成本次复习！"
    ASSISTANT_UNAVAILABLE = "AI 助教暂时无法连接: {error}"
    DEFAULT_DECK_TITLE = "卡组 - {timestamp}"

    @classmethod
    def preview_result(cls, count: int) -> str:
        """Get the notification for a preview of ``count`` cards."""
        if count > 0:
            return cls.PREVIEW_SUCCESS.format(count=count)
        return cls.PREVIEW_FAILED
