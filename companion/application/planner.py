"""Quick planning estimates for the gear and resource dashboard.

Rough figures for campaign farming energy and artifact upgrade silver;
good enough for planning, not exact game costs.
"""
from companion.domain.invariant import sanitize_count

ENERGY_PER_RANK = {
    4: 640,
    5: 1280,
    6: 2560,
}

SILVER_PER_UPGRADE = {
    "+12": 350000,
    "+16": 1200000,
}


def energy_needed(rank_target, champion_count) -> int:
    """Energy to rank `champion_count` food champions up to `rank_target` stars."""
    try:
        per_champion = ENERGY_PER_RANK[int(rank_target)]
    except (KeyError, TypeError, ValueError):
        raise ValueError(f"Unsupported rank target: {rank_target!r}")
    return per_champion * sanitize_count(champion_count)


def silver_needed(upgrade_target: str, pieces) -> int:
    """Silver to take `pieces` artifacts to `upgrade_target` (+12 or +16)."""
    key = str(upgrade_target).strip()
    if not key.startswith("+"):
        key = f"+{key}"
    if key not in SILVER_PER_UPGRADE:
        raise ValueError(f"Unsupported upgrade target: {upgrade_target!r}")
    return SILVER_PER_UPGRADE[key] * sanitize_count(pieces)
