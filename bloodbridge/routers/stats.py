# bloodbridge/routers/stats.py
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from bloodbridge.core.config import settings
from bloodbridge.deps import get_repo
from bloodbridge.schemas import DashboardStats
from bloodbridge.services.stats import compute_stats, plot_blood_groups_png

router = APIRouter(prefix="/api/stats", tags=["stats"])

async def _load(repo):
    return (await repo.select_rows("blood_donations"),
            await repo.select_rows("blood_requests"))

@router.get("/overview", response_model=DashboardStats)
async def overview(repo=Depends(get_repo)):
    donations, requests = await _load(repo)
    return compute_stats(donations, requests, recent_days=settings.recent_days)

@router.get("/plots/blood_groups.png")
async def blood_groups_plot(repo=Depends(get_repo)):
    buf = plot_blood_groups_png(*(await _load(repo)))
    return StreamingResponse(buf, media_type="image/png")
