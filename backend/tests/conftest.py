"""
Shared test fixtures.

Provides:
- A fixed clock (all scheduling takes ``now`` explicitly)
- Card/deck builders
- In-memory deck store
- Sample study notes in the two supported section formats
"""

from datetime import UTC, datetime, timedelta

import pytest

from idiomcards.adapters.memory_deck_store import InMemoryDeckStore
from idiomcards.domain.entities.card import Card
from idiomcards.domain.entities.deck import Deck

NOW = datetime(2024, 1, 1, tzinfo=UTC)

SAMPLE_NOTES = """标题：Friends S01E01

重要俚语/习惯用语/短语

break the ice
意思解释： 打破僵局，让气氛变得轻松
在文中的句子： Let me break the ice with a joke.
简要文化背景或用法说明： 常用于社交场合的开场。
翻译这句话的意思： 让我讲个笑话来活跃一下气氛。

hit the sack
意思解释： 上床睡觉
在文中的句子： I'm exhausted, I'm going to hit the sack.
简要文化背景或用法说明： 非正式口语。
翻译这句话的意思： 我累坏了，要去睡觉了。

简单常见表达
以下是一些常见表达：
What's up - 最近怎么样
No way - 不可能
Take it easy - 放轻松 - 别紧张
"""


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_card():
    """Build a card with sensible defaults."""

    def _make(
        card_id: str = "c1",
        term: str = "break the ice",
        srs_level: int = 0,
        due_date: datetime | None = None,
        **fields,
    ) -> Card:
        return Card(
            id=card_id,
            term=term,
            meaning=fields.get("meaning", "打破僵局"),
            example=fields.get("example", ""),
            context=fields.get("context", ""),
            translation=fields.get("translation", ""),
            srs_level=srs_level,
            due_date=due_date or NOW,
        )

    return _make


@pytest.fixture
def mixed_deck(make_card) -> Deck:
    """Deck with two due cards and one scheduled in the future."""
    return Deck(
        id="deck-1",
        title="Friends S01E01",
        cards=[
            make_card("c1", "break the ice", due_date=NOW - timedelta(days=1)),
            make_card("c2", "hit the sack", srs_level=2, due_date=NOW),
            make_card("c3", "piece of cake", srs_level=4, due_date=NOW + timedelta(days=3)),
        ],
        created_at=NOW - timedelta(days=10),
    )


@pytest.fixture
def memory_store(mixed_deck) -> InMemoryDeckStore:
    return InMemoryDeckStore([mixed_deck])


@pytest.fixture
def sample_notes() -> str:
    return SAMPLE_NOTES
