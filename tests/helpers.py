from __future__ import annotations

from ringside.contracts import Competitor, Side, Tier


def competitor(
    competitor_id: str,
    fans: int = 10_000,
    tier: Tier = Tier.CONTENDER,
    *,
    bumps: int = 0,
    active_injuries: int = 0,
) -> Competitor:
    return Competitor(
        competitor_id=competitor_id,
        name=competitor_id.replace("_", " ").title(),
        tier=tier,
        fans=fans,
        bumps=bumps,
        active_injuries=active_injuries,
    )


def side(*members: Competitor, name: str | None = None) -> Side:
    return Side(members=list(members), name=name)


def singles(a_fans: int = 10_000, b_fans: int = 10_000, tier: Tier = Tier.ROOKIE) -> list[Side]:
    return [side(competitor("alpha", a_fans, tier)), side(competitor("bravo", b_fans, tier))]
