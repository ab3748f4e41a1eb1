"""
Politician roster endpoint
──────────────────────────────────────────────────────────────────────────────
GET /politicians?office=<Senator|Representative>&candidates=<bool>

Always answers 200. When OpenFEC is unavailable the bundled example
politicians come back with ``isMockData`` and ``error`` set, so the picker
keeps working.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from whofunds.api.dependencies import get_roster_service
from whofunds.models.politician import Office, RosterResult
from whofunds.services.roster import RosterService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["politicians"])


@router.get("/politicians", response_model=RosterResult, response_model_exclude_none=True)
async def list_politicians(
    candidates: bool = Query(False, description="Include challengers (accepted for compatibility)"),
    office: Optional[Office] = Query(None, description="Senator or Representative"),
    roster: RosterService = Depends(get_roster_service),
):
    """Senate and House candidates for the current election year."""
    logger.info(f"Politicians API request - showCandidates: {candidates}, office: {office}")
    return await roster.list_politicians(office=office)
