"""Rating-profile normalisation and score distribution."""
from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional

# (category key, label, category maximum)
RATING_CATEGORIES = [
    ("loylyt", "Löylyt", 25),
    ("miljoo", "Miljöö", 4),
    ("ilmapiiri", "Ilmapiiri", 3),
    ("hinta", "Hinta", 3),
    ("saavutettavuus", "Saavut.", 3),
    ("oheispalvelut", "Palvelut", 3),
]


def parse_rating(value: Optional[str], maximum: float) -> float:
    """Convert an "n/max" rating string to a 0-100 percentage of ``maximum``."""
    if not value:
        return 0.0
    head = str(value).split("/", 1)[0].strip().replace(",", ".")
    try:
        score = float(head)
    except ValueError:
        return 0.0
    if not math.isfinite(score):
        return 0.0
    return score / maximum * 100.0


def rating_profile(ratings: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    ratings = ratings or {}
    return [
        {"subject": label, "value": parse_rating(ratings.get(key), maximum)}
        for key, label, maximum in RATING_CATEGORIES
    ]


def score_distribution(facilities: Iterable[Dict[str, Any]], bins: int = 15) -> List[Dict[str, Any]]:
    if bins < 1:
        raise ValueError("bins must be >= 1")
    scores = [float(f["score"]) for f in facilities if (f.get("score") or 0) > 0]
    if not scores:
        return []
    lo = min(scores)
    hi = max(scores)
    width = (hi - lo) / bins if hi > lo else 1.0
    counts = [0] * bins
    for score in scores:
        idx = min(int((score - lo) / width), bins - 1)
        counts[idx] += 1
    return [
        {"x0": lo + i * width, "x1": lo + (i + 1) * width, "count": counts[i]}
        for i in range(bins)
    ]
