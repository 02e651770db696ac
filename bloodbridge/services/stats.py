# bloodbridge/services/stats.py
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from collections import Counter
from datetime import datetime, timedelta, timezone
from io import BytesIO
from typing import List, Optional, Union

from bloodbridge.schemas import BLOOD_GROUPS, DashboardStats

def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """ISO-8601 string or datetime -> aware UTC datetime (naive means UTC)."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value

def compute_stats(donations: List[dict], requests: List[dict],
                  now: Optional[datetime] = None, recent_days: int = 7) -> DashboardStats:
    """
    total   - every donation row
    recent  - donations created strictly within the trailing ``recent_days``
    matched - requests sharing a blood group with at least one donation;
              an existence check, quantities are not consumed
    """
    now = parse_timestamp(now) if now else datetime.now(timezone.utc)
    cutoff = now - timedelta(days=recent_days)

    recent = sum(
        1 for d in donations
        if d.get("created_at") and parse_timestamp(d["created_at"]) > cutoff
    )
    donated_groups = {d.get("blood_group") for d in donations}
    matched = sum(1 for r in requests if r.get("blood_group") in donated_groups)

    return DashboardStats(total=len(donations), recent=recent, matched=matched)

def plot_blood_groups_png(donations: List[dict], requests: List[dict]) -> BytesIO:
    """
    Side-by-side bars of donations and requests per blood group.
    Returns a BytesIO PNG buffer.
    """
    offered = Counter(d.get("blood_group") for d in donations)
    needed = Counter(r.get("blood_group") for r in requests)
    xs = range(len(BLOOD_GROUPS))

    fig, ax = plt.subplots(figsize=(7, 3.5))
    ax.bar([x - 0.2 for x in xs], [offered[g] for g in BLOOD_GROUPS], width=0.4, label="Donations")
    ax.bar([x + 0.2 for x in xs], [needed[g] for g in BLOOD_GROUPS], width=0.4, label="Requests")
    ax.set_xticks(list(xs))
    ax.set_xticklabels(BLOOD_GROUPS)
    ax.set_title("Donations vs Requests by Blood Group")
    ax.legend()
    fig.tight_layout()

    buf = BytesIO()
    fig.savefig(buf, format="png")
    plt.close(fig)
    buf.seek(0)
    return buf
