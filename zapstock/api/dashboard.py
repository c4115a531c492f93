from fastapi import APIRouter, Depends

from zapstock.api.deps import get_store
from zapstock.application.dashboard import build_summary
from zapstock.application.schemas import DashboardSummary
from zapstock.application.store import RecordStore
from zapstock.core_settings import Settings, get_settings

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("", response_model=DashboardSummary)
async def dashboard(
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    return build_summary(store, settings.LOW_STOCK_THRESHOLD)
