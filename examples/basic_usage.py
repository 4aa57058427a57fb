"""Basic usage example for the cafe ranking core."""

import json
from pathlib import Path
from typing import List

from cafe_ranking import (
    Keyword,
    PageNode,
    PageTree,
    RankingRequestModel,
    RankingService,
    ScorableEntity,
)
from cafe_ranking.models.entity import EntityModel


KEYWORDS = [
    Keyword("不限時", 3.0, category="service"),
    Keyword("插座", 2.5, category="facility"),
    Keyword("安靜", 2.0, category="environment"),
    Keyword("wifi", 1.5, category="facility"),
    Keyword("咖啡", 1.0),
]


def load_sample_cafes(data_file: Path) -> List[ScorableEntity]:
    """Load cafe payloads from JSON and convert them to entities."""
    with open(data_file, encoding="utf-8") as f:
        data = json.load(f)
    return [EntityModel.model_validate(item).to_entity() for item in data]


def basic_ranking_demo():
    """Demonstrate ranking, filtering and request parsing."""
    print("☕ Cafe Ranking - Basic Usage Demo")
    print("=" * 50)

    print("\n1. Initializing ranking service...")
    service = RankingService(collect_statistics=True, log_level="WARNING")

    print("\n2. Loading sample cafes...")
    sample_data_file = Path(__file__).parent / "sample_data" / "sample_cafes.json"

    if not sample_data_file.exists():
        print("   Generating sample data...")
        from sample_data.generate_sample_data import save_sample_cafes
        save_sample_cafes(sample_data_file.parent)

    cafes = load_sample_cafes(sample_data_file)
    print(f"   Loaded {len(cafes)} cafes")

    print("\n3. Ranking without filters (top 5)...")
    response = service.rank(cafes, KEYWORDS, top_n=5)
    for result in response.results:
        print(f"   {result.rank}. {result.name} ({result.district}) - Score: {result.score:.1f}")

    print("\n4. Filtering examples...")

    examples = [
        ("Daan or Xinyi only", dict(districts=["大安區", "信義區"])),
        ("Unlimited time AND sockets", dict(features=["不限時", "有插座"])),
        ("Quiet OR bright", dict(features=["安靜", "明亮"], match_all=False)),
        ("Rated 4.0 or better in Daan", dict(districts="大安區", min_rating=4.0)),
    ]

    for description, filters in examples:
        response = service.rank(cafes, KEYWORDS, top_n=3, **filters)
        print(f"\n   {description}: {response.filtered_count} matches")
        for result in response.results:
            print(f"     {result.rank}. {result.name} - {', '.join(result.features)}")

        if response.chain_statistics:
            for stage in response.chain_statistics.stages:
                print(f"     [{stage.description}] {stage.before} -> {stage.after} "
                      f"({stage.retention:.1f}% kept)")

    suggestions = service.suggest_filters(service.rank(cafes, KEYWORDS).results)
    print(f"\n   Suggested district: {suggestions['top_district']}")
    print(f"   Suggested features: {', '.join(suggestions['top_features'])}")

    print("\n5. Parsing a request payload...")
    request = RankingRequestModel(
        entities=[EntityModel.from_entity(cafe) for cafe in cafes[:10]],
        keywords={keyword.term: keyword.weight for keyword in KEYWORDS},
        districts="中山區, 大安區, 松山區",
        top_n=3,
    )
    response = service.rank_request(request)
    print(json.dumps(response.to_dict(), ensure_ascii=False, indent=2)[:500])

    print("\n6. Depth discount from a page tree...")
    home = ScorableEntity(id="home", name="Home", content="咖啡 咖啡 不限時")
    listing = ScorableEntity(id="listing", name="Listing", content="咖啡 不限時 插座")
    detail = ScorableEntity(id="detail", name="Detail", content="不限時 插座 插座")

    tree = PageTree(home)
    tree.root.add_child(PageNode(listing)).add_child(PageNode(detail))
    print(f"   Depths: {tree.depth_annotations()}")

    response = service.rank([home, listing, detail], KEYWORDS, depths=tree.depth_annotations())
    for result in response.results:
        print(f"   {result.rank}. {result.name} - Score: {result.score:.1f}")

    stats = service.get_stats()
    print(f"\n   Requests served: {stats['total_requests']}")
    print(f"   Average rank time: {stats['avg_rank_time']:.4f}s")

    print("\n✅ Demo completed successfully!")


if __name__ == "__main__":
    basic_ranking_demo()
