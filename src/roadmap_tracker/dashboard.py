"""Progress metrics for the monthly dashboard."""
from collections import defaultdict

from roadmap_tracker.config import DEFAULT_CONFIG, SchedulingConfig
from roadmap_tracker.models import Confidence, Status

STRONG_TARGET = 65.0
WEAK_CEILING = 5.0


def get_readiness_label(strong_pct: float, weak_pct: float) -> str:
    if strong_pct >= STRONG_TARGET and weak_pct <= WEAK_CEILING:
        return "ON TRACK"
    elif strong_pct >= STRONG_TARGET or weak_pct <= WEAK_CEILING:
        return "CLOSE"
    elif strong_pct >= STRONG_TARGET / 2:
        return "NEEDS WORK"
    return "BEHIND"


def get_readiness_color(score: float) -> str:
    if score >= 80:
        return "green"
    elif score >= 65:
        return "yellow"
    elif score >= 50:
        return "dark_orange"
    return "red"


def _pct(count: int, total: int) -> int:
    return round(count * 100 / total)


def progress_stats(items: list) -> dict:
    total = len(items) or 1
    solved = sum(1 for i in items if i.status is Status.SOLVED)
    attempted = sum(1 for i in items if i.status is Status.ATTEMPTED)
    strong = sum(1 for i in items if i.confidence is Confidence.STRONG)
    weak = sum(1 for i in items if i.confidence is Confidence.WEAK)
    return {
        "total": len(items),
        "solved": solved,
        "attempted": attempted,
        "strong": strong,
        "weak": weak,
        "solved_pct": _pct(solved, total),
        "strong_pct": _pct(strong, total),
        "weak_pct": _pct(weak, total),
        "revisions": sum(i.revision_count for i in items),
    }


def pattern_mastery(items: list, config: SchedulingConfig = DEFAULT_CONFIG) -> list[dict]:
    """Share of Strong items per pattern; a pattern is mastered at config.mastery_threshold."""
    groups = defaultdict(list)
    for item in items:
        groups[item.pattern].append(item)
    results = []
    for pattern, members in groups.items():
        strong = sum(1 for i in members if i.confidence is Confidence.STRONG)
        pct = strong * 100 / len(members)
        results.append({
            "pattern": pattern,
            "total": len(members),
            "strong": strong,
            "strong_pct": round(pct, 1),
            "mastered": pct >= config.mastery_threshold,
        })
    results.sort(key=lambda r: (-r["strong_pct"], r["pattern"]))
    return results
