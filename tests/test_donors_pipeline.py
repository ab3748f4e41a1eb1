import httpx
import pytest

from whofunds.config.constants import SMALL_DONATIONS_NAME
from whofunds.errors import (
    InvalidInputError,
    MissingCredentialError,
    NotFoundError,
    UpstreamFailureError,
)
from whofunds.services.donors import DonorPipeline, PipelineState
from tests.fakes import contribution, paged, results

CID = "S2UT00106"
COMMITTEES = f"/candidate/{CID}/committees/"
SCHEDULE_A = "/schedules/schedule_a/"


def pipeline(fec, api_key="test-key", **kwargs) -> DonorPipeline:
    options = {
        "small_donation_threshold": 0,
        "limit": 20,
        "require_committees": False,
        "mock_fallback": True,
    }
    options.update(kwargs)
    return DonorPipeline(fec.client(api_key=api_key), **options)


def committees(*ids):
    return lambda request: results([{"committee_id": cid, "designation": "P"} for cid in ids])


def by_committee(responders: dict):
    """Route Schedule A requests to a responder per committee_id."""
    def responder(request: httpx.Request) -> httpx.Response:
        return responders[request.url.params["committee_id"]](request)
    return responder


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
@pytest.mark.parametrize("cid", ["X123", "", None, "12345", "S2UT-0106"])
async def test_rejects_bad_candidate_id_before_any_request(fec, cid):
    donor_pipeline = pipeline(fec)

    with pytest.raises(InvalidInputError):
        await donor_pipeline.run(cid)

    assert fec.calls == []
    assert donor_pipeline.state == PipelineState.ERROR


@pytest.mark.asyncio
async def test_candidate_id_is_normalized(fec):
    fec.add(COMMITTEES, committees())
    fec.add(SCHEDULE_A, paged([[contribution("A", 10)]]))

    result = await pipeline(fec).run("  s2ut00106 ", cycle=2024)

    assert result.candidate_id == CID
    assert fec.calls_to(SCHEDULE_A)[0].url.params["candidate_id"] == CID


# ---------------------------------------------------------------------------
# Committees
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_merges_committees_in_order(fec):
    fec.add(COMMITTEES, committees("C001", "C002"))
    fec.add(SCHEDULE_A, by_committee({
        "C001": paged([[contribution("ACME PAC", 500, employer="Acme"), contribution("B", 300)]]),
        "C002": paged([[
            contribution("ACME PAC", 200, employer="Other Employer"),
            contribution("C", 1000),
            contribution("D", 50),
        ]]),
    }))

    donor_pipeline = pipeline(fec, small_donation_threshold=100)
    result = await donor_pipeline.run(CID, cycle=2024)

    assert [(d.name, d.amount) for d in result.donors] == [
        ("C", 1000),
        ("ACME PAC", 700),
        ("B", 300),
        (SMALL_DONATIONS_NAME, 50),
    ]
    assert result.donors[1].industry == "Acme"
    assert result.small_donations_total == 50
    assert result.committees == ["C001", "C002"]
    assert result.partial is False
    assert result.is_mock_data is False
    assert result.message is None
    assert donor_pipeline.state == PipelineState.DONE

    committee_ids = sorted(r.url.params["committee_id"] for r in fec.calls_to(SCHEDULE_A))
    assert committee_ids == ["C001", "C002"]


@pytest.mark.asyncio
async def test_falls_back_to_candidate_when_no_committees(fec):
    fec.add(COMMITTEES, committees())
    fec.add(SCHEDULE_A, paged([[contribution("A", 250)]]))

    result = await pipeline(fec).run(CID, cycle=2024)

    assert [d.name for d in result.donors] == ["A"]
    assert result.committees == []
    request = fec.calls_to(SCHEDULE_A)[0]
    assert request.url.params["candidate_id"] == CID
    assert "committee_id" not in request.url.params


@pytest.mark.asyncio
async def test_falls_back_to_candidate_when_committee_lookup_fails(fec):
    fec.add(COMMITTEES, lambda request: httpx.Response(500))
    fec.add(SCHEDULE_A, paged([[contribution("A", 250)]]))

    result = await pipeline(fec).run(CID, cycle=2024)

    assert [d.name for d in result.donors] == ["A"]
    assert fec.calls_to(SCHEDULE_A)[0].url.params["candidate_id"] == CID


@pytest.mark.asyncio
async def test_require_committees_raises_not_found(fec):
    fec.add(COMMITTEES, committees())
    donor_pipeline = pipeline(fec, require_committees=True)

    with pytest.raises(NotFoundError):
        await donor_pipeline.run(CID, cycle=2024)

    assert fec.calls_to(SCHEDULE_A) == []
    assert donor_pipeline.state == PipelineState.ERROR


# ---------------------------------------------------------------------------
# Upstream failures
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_first_page_failure_is_upstream_failure(fec):
    fec.add(COMMITTEES, committees("C001"))
    fec.add(SCHEDULE_A, paged([[contribution("A", 1)]], fail_on={1}, status=503))
    donor_pipeline = pipeline(fec)

    with pytest.raises(UpstreamFailureError) as exc_info:
        await donor_pipeline.run(CID, cycle=2024)

    assert exc_info.value.upstream_status == 503
    assert donor_pipeline.state == PipelineState.ERROR


@pytest.mark.asyncio
async def test_later_page_failure_is_partial(fec):
    fec.add(COMMITTEES, committees("C001"))
    fec.add(SCHEDULE_A, paged([[contribution("A", 500)], [contribution("B", 400)]], fail_on={2}))

    result = await pipeline(fec).run(CID, cycle=2024)

    assert [d.name for d in result.donors] == ["A"]
    assert result.partial is True
    assert "C001" in result.message


@pytest.mark.asyncio
async def test_one_failed_committee_is_partial(fec):
    fec.add(COMMITTEES, committees("C001", "C002"))
    fec.add(SCHEDULE_A, by_committee({
        "C001": paged([[contribution("A", 500)]]),
        "C002": paged([[contribution("B", 400)]], fail_on={1}),
    }))

    result = await pipeline(fec).run(CID, cycle=2024)

    assert [d.name for d in result.donors] == ["A"]
    assert result.partial is True
    assert "C002" in result.message


@pytest.mark.asyncio
async def test_every_committee_failing_raises(fec):
    fec.add(COMMITTEES, committees("C001", "C002"))
    fec.add(SCHEDULE_A, paged([], fail_on={1}))

    with pytest.raises(UpstreamFailureError):
        await pipeline(fec).run(CID, cycle=2024)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_zero_contributions_is_an_empty_result(fec):
    fec.add(COMMITTEES, committees("C001"))
    fec.add(SCHEDULE_A, paged([[]]))

    donor_pipeline = pipeline(fec)
    result = await donor_pipeline.run(CID, cycle=2024)

    assert result.donors == []
    assert result.is_mock_data is False
    assert result.partial is False
    assert result.message == f"No contributions reported for {CID} in 2024"
    assert donor_pipeline.state == PipelineState.DONE


@pytest.mark.asyncio
async def test_limit_truncates_ranked_donors(fec):
    fec.add(COMMITTEES, committees("C001"))
    fec.add(SCHEDULE_A, paged([[contribution(f"Donor {i:02d}", 1000 - i) for i in range(30)]]))

    result = await pipeline(fec, limit=20).run(CID, cycle=2024)

    assert len(result.donors) == 20
    assert result.donors[0].name == "Donor 00"
    assert result.donors[-1].name == "Donor 19"


@pytest.mark.asyncio
async def test_odd_cycle_maps_to_its_period(fec):
    fec.add(COMMITTEES, committees("C001"))
    fec.add(SCHEDULE_A, paged([[contribution("A", 10)]]))

    result = await pipeline(fec).run(CID, cycle=2023)

    assert result.cycle == 2024
    assert fec.calls_to(COMMITTEES)[0].url.params["cycle"] == "2024"
    assert fec.calls_to(SCHEDULE_A)[0].url.params["two_year_transaction_period"] == "2024"


# ---------------------------------------------------------------------------
# Missing credential
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_mock_donors_without_key(fec):
    donor_pipeline = pipeline(fec, api_key="", limit=5)

    result = await donor_pipeline.run("S4VT00033", cycle=2024)

    assert result.is_mock_data is True
    assert len(result.donors) == 5
    assert result.donors[0].name == "University of California"
    assert result.message
    assert donor_pipeline.state == PipelineState.MOCK_FALLBACK
    assert fec.calls == []


@pytest.mark.asyncio
async def test_mock_for_unknown_candidate_is_empty(fec):
    result = await pipeline(fec, api_key="").run("S9XX99999", cycle=2024)

    assert result.is_mock_data is True
    assert result.donors == []


@pytest.mark.asyncio
async def test_missing_key_without_mock_fallback(fec):
    donor_pipeline = pipeline(fec, api_key="", mock_fallback=False)

    with pytest.raises(MissingCredentialError):
        await donor_pipeline.run(CID, cycle=2024)

    assert fec.calls == []
    assert donor_pipeline.state == PipelineState.ERROR
