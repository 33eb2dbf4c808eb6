from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Tuple

RateKey = Tuple[str, str]


def resolve_bill_rate(
    *,
    override: Optional[float],
    single_rate: Optional[float],
    role_rate: Optional[float],
) -> float:
    """Assignment override, then the project's single rate, then the role rate."""
    if override is not None:
        return float(override)
    if single_rate is not None:
        return float(single_rate)
    return float(role_rate or 0.0)


def build_rate_lookup(
    project: Any,
    assignments: Iterable[Any],
    role_rates: Iterable[Any],
) -> Dict[RateKey, float]:
    """Bill rate per (person_id, role_id) for a project's assignments."""
    single_rate: Optional[float] = None
    if getattr(project, "use_single_rate", False) and getattr(project, "single_bill_rate", None) is not None:
        single_rate = float(project.single_bill_rate)

    rate_by_role = {rr.role_id: float(rr.bill_rate) for rr in role_rates}
    lookup: Dict[RateKey, float] = {}
    for assignment in assignments:
        lookup[(assignment.person_id, assignment.role_id)] = resolve_bill_rate(
            override=assignment.bill_rate_override,
            single_rate=single_rate,
            role_rate=rate_by_role.get(assignment.role_id),
        )
    return lookup


__all__ = ["RateKey", "resolve_bill_rate", "build_rate_lookup"]
