"""
FastAPI dependency providers.

The FEC client and roster service live on ``app.state`` for the lifetime of
the app (the roster cache must outlive a single request). A donor pipeline
is cheap and stateful, so each request gets a new one.

Tests replace any of these with ``app.dependency_overrides``.
"""
from fastapi import Depends, Request

from whofunds.config.settings import Settings
from whofunds.ingestion.client import FECClient
from whofunds.services.aggregator import get_name_key
from whofunds.services.classifier import DonorClassifier
from whofunds.services.donors import DonorPipeline
from whofunds.services.roster import RosterService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_fec_client(request: Request) -> FECClient:
    return request.app.state.fec_client


def get_roster_service(request: Request) -> RosterService:
    return request.app.state.roster_service


def get_classifier() -> DonorClassifier:
    return DonorClassifier()


def get_donor_pipeline(
    client: FECClient = Depends(get_fec_client),
    settings: Settings = Depends(get_app_settings),
) -> DonorPipeline:
    return DonorPipeline(
        client,
        small_donation_threshold=settings.SMALL_DONATION_THRESHOLD,
        limit=settings.TOP_DONORS_LIMIT,
        require_committees=settings.REQUIRE_COMMITTEES,
        mock_fallback=settings.MOCK_FALLBACK_ENABLED,
        name_key=get_name_key(settings.DONOR_NAME_MATCHING),
        per_page=settings.PAGE_SIZE,
        max_pages=settings.MAX_PAGES,
    )
