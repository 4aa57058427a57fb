"""Pytest configuration and shared fixtures."""

import pytest
from typing import Dict, List

from cafe_ranking.models.entity import Cafe, ScorableEntity
from cafe_ranking.models.result import ResultRecord
from cafe_ranking.core.ranker import Ranker


@pytest.fixture
def keyword_weights() -> Dict[str, float]:
    """Keyword weight table used across tests."""
    return {
        "不限時": 3.0,
        "插座": 2.5,
        "安靜": 2.0,
        "咖啡": 1.0,
        "wifi": 1.5,
    }


@pytest.fixture
def sample_cafes() -> List[Cafe]:
    """Create ten sample cafes spread over districts and features."""
    return [
        Cafe(
            id="cafe_001",
            name="晨光咖啡",
            url="https://example.com/cafe_001",
            content="不限時 有插座 安靜的咖啡廳，咖啡好喝，不限時讀書好去處。",
            district="大安區",
            features=("不限時", "有插座", "有wifi"),
            rating=4.5,
            phone="02-2700-0001",
            address="台北市大安區復興南路一段1號",
        ),
        Cafe(
            id="cafe_002",
            name="巷弄咖啡",
            url="https://example.com/cafe_002",
            content="中山區巷弄裡的咖啡店，有插座，wifi 穩定。",
            district="中山區",
            features=("有插座", "有wifi"),
            rating=4.2,
        ),
        Cafe(
            id="cafe_003",
            name="安靜角落",
            url="https://example.com/cafe_003",
            content="安靜 安靜 安靜，適合工作的咖啡空間，不限時。",
            district="大安區",
            features=("不限時", "安靜"),
            rating=4.8,
        ),
        Cafe(
            id="cafe_004",
            name="信義工作室",
            url="https://example.com/cafe_004",
            content="信義區咖啡，有 wifi 與插座。",
            district="信義區",
            features=("有wifi", "有插座", "明亮"),
            rating=3.9,
        ),
        Cafe(
            id="cafe_005",
            name="大安書房",
            url="https://example.com/cafe_005",
            content="書香咖啡，有wifi。",
            district="大安區",
            features=("有wifi",),
            rating=4.0,
        ),
        Cafe(
            id="cafe_006",
            name="松山小館",
            url="https://example.com/cafe_006",
            content="松山區的甜點店。",
            district="松山區",
            features=("提供餐點",),
            rating=3.5,
        ),
        Cafe(
            id="cafe_007",
            name="無名咖啡",
            url="https://example.com/cafe_007",
            content="咖啡 咖啡",
            district=None,
            features=("有wifi",),
            rating=3.0,
        ),
        Cafe(
            id="cafe_008",
            name="大安露台",
            url="https://example.com/cafe_008",
            content="戶外座位，咖啡香。",
            district="大安區",
            features=(),
            rating=4.1,
        ),
        Cafe(
            id="cafe_009",
            name="士林夜讀",
            url="https://example.com/cafe_009",
            content="不限時 插座 wifi 咖啡",
            district="士林區",
            features=("不限時", "有插座", "有wifi"),
            rating=4.4,
        ),
        Cafe(
            id="cafe_010",
            name="大安插座站",
            url="https://example.com/cafe_010",
            content="插座 插座 不限時",
            district="大安區",
            features=("有插座", "不限時"),
            rating=4.3,
        ),
    ]


@pytest.fixture
def sample_pages() -> List[ScorableEntity]:
    """Plain pages without cafe attributes."""
    return [
        ScorableEntity(id="page_a", name="Page A", url="https://a.example.com", content="coffee coffee wifi"),
        ScorableEntity(id="page_b", name="Page B", url="https://b.example.com", content="coffee"),
        ScorableEntity(id="page_c", name="Page C", url="https://c.example.com", content="tea only"),
    ]


@pytest.fixture
def ranker(sample_cafes) -> Ranker:
    """Ranker tracking the sample cafes."""
    return Ranker(sample_cafes)


@pytest.fixture
def ranked_results(ranker, keyword_weights) -> List[ResultRecord]:
    """Normalized, ranked records of the sample cafes."""
    ranker.compute_final_scores(keyword_weights)
    ranker.normalize_scores()
    return ranker.get_ranked_results()


@pytest.fixture
def make_record():
    """Factory building result records directly for filter tests."""
    def _make(
        entity_id: str,
        district=None,
        features=(),
        score: float = 10.0,
        rank: int = 1,
        rating=None,
        tags=(),
    ) -> ResultRecord:
        return ResultRecord(
            entity_id=entity_id,
            name=entity_id,
            url=f"https://example.com/{entity_id}",
            score=score,
            rank=rank,
            district=district,
            rating=rating,
            features=tuple(features),
            tags=tuple(tags),
        )
    return _make
