"""Generate sample coffee shop pages for the ranking demos."""

import json
import random
from pathlib import Path
from typing import List

from cafe_ranking.config import FEATURE_CATEGORIES, VALID_DISTRICTS
from cafe_ranking.models.entity import Cafe, EntityModel


NAME_PREFIXES = ["晨光", "巷弄", "書香", "慢活", "午後", "森林", "轉角", "月光", "日常", "老宅"]
NAME_SUFFIXES = ["咖啡", "咖啡館", "珈琲", "工作室", "小館"]

REVIEW_SNIPPETS = [
    "不限時，適合久坐讀書",
    "座位旁都有插座",
    "環境安靜，音樂很小聲",
    "wifi 很穩定，適合遠端工作",
    "採光明亮，拍照好看",
    "咖啡豆每週更換，手沖很香",
    "甜點普通，但咖啡很好喝",
    "假日人多，建議先預約",
    "可以帶寵物，店貓很親人",
    "價格實惠，CP值高",
]


def generate_cafes(count: int = 40, seed: int = 42) -> List[Cafe]:
    """Generate cafes with random districts, features and review text."""
    rng = random.Random(seed)
    all_features = [feature for group in FEATURE_CATEGORIES.values() for feature in group]

    cafes = []
    for i in range(count):
        district = rng.choice(VALID_DISTRICTS)
        name = f"{rng.choice(NAME_PREFIXES)}{rng.choice(NAME_SUFFIXES)}"
        content = "，".join(rng.sample(REVIEW_SNIPPETS, k=rng.randint(2, 5)))

        cafes.append(Cafe(
            id=f"cafe_{i + 1:03d}",
            name=name,
            url=f"https://example.com/cafes/{i + 1:03d}",
            content=f"{name}位於{district}。{content}。",
            district=district,
            address=f"台北市{district}示範路{rng.randint(1, 300)}號",
            features=tuple(rng.sample(all_features, k=rng.randint(0, 4))),
            rating=round(rng.uniform(3.0, 5.0), 1),
            review_count=rng.randint(0, 800),
        ))

    return cafes


def save_sample_cafes(output_dir: Path, count: int = 40) -> Path:
    """Write generated cafes as entity payloads to ``sample_cafes.json``."""
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / "sample_cafes.json"

    payload = [
        EntityModel.from_entity(cafe).model_dump(mode="json")
        for cafe in generate_cafes(count)
    ]
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)

    print(f"Generated {len(payload)} sample cafes in {output_file}")
    return output_file


if __name__ == "__main__":
    save_sample_cafes(Path(__file__).parent)
