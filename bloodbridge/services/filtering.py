# bloodbridge/services/filtering.py
"""
Narrowing of in-memory profile lists for the dashboards.

Rows are the plain dicts returned by the table store. Every filter keeps the
input order and never mutates a row; predicates are AND-combined and the
value ``"all"`` switches a predicate off.
"""
from typing import Callable, Dict, Iterable, List

from bloodbridge.schemas import BLOOD_GROUPS, URGENCY_LEVELS

ALL = "all"

AGE_BUCKETS: Dict[str, Callable[[int], bool]] = {
    "under25": lambda age: age < 25,
    "25to40": lambda age: 25 <= age <= 40,
    "over40": lambda age: age > 40,
}

def _check(value: str, allowed: Iterable[str], label: str) -> None:
    if value != ALL and value not in allowed:
        raise ValueError(f"unknown {label} filter: {value!r}")

def _contains(haystack, needle: str) -> bool:
    return needle.lower() in str(haystack or "").lower()

def filter_hospitals(rows: List[dict], search: str = "", blood_group: str = ALL,
                     urgency: str = ALL) -> List[dict]:
    """Requests whose name or address contains ``search`` (any case)."""
    _check(blood_group, BLOOD_GROUPS, "blood group")
    _check(urgency, URGENCY_LEVELS, "urgency")

    def keep(row: dict) -> bool:
        if search and not (_contains(row.get("name"), search) or _contains(row.get("address"), search)):
            return False
        if blood_group != ALL and row.get("blood_group") != blood_group:
            return False
        if urgency != ALL and row.get("urgency") != urgency:
            return False
        return True

    return [r for r in rows if keep(r)]

def filter_donors(rows: List[dict], search: str = "", blood_group: str = ALL,
                  age: str = ALL) -> List[dict]:
    """Donors whose name (any case) or phone number contains ``search``."""
    _check(blood_group, BLOOD_GROUPS, "blood group")
    _check(age, AGE_BUCKETS, "age")
    in_bucket = AGE_BUCKETS.get(age)

    def keep(row: dict) -> bool:
        if search and not (_contains(row.get("name"), search) or search in str(row.get("phone_number") or "")):
            return False
        if blood_group != ALL and row.get("blood_group") != blood_group:
            return False
        if in_bucket and not in_bucket(int(row.get("age") or 0)):
            return False
        return True

    return [r for r in rows if keep(r)]

def urgent_only(rows: List[dict]) -> List[dict]:
    return [r for r in rows if r.get("urgency") == "High"]
