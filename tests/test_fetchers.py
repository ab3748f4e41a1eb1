from decimal import Decimal

import httpx
import pytest

from whofunds.errors import UpstreamFailureError
from whofunds.ingestion.candidates import CandidateDirectoryFetcher
from whofunds.ingestion.committees import CommitteeResolver
from whofunds.ingestion.fec import ContributionFetcher
from whofunds.models.politician import Office, Party
from tests.fakes import candidate, contribution, paged, results


# ---------------------------------------------------------------------------
# Schedule A
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_contributions_follow_pagination(fec):
    fec.add("/schedules/schedule_a/", paged([
        [contribution("A", 100), contribution("B", 50)],
        [contribution("C", 25)],
    ]))
    fetcher = ContributionFetcher(fec.client())

    items = await fetcher.run(committee_id="C00000001", cycle=2024)

    assert [(c.donor_name, c.amount) for c in items] == [("A", 100), ("B", 50), ("C", 25)]
    calls = fec.calls_to("/schedules/schedule_a/")
    assert [c.url.params["page"] for c in calls] == ["1", "2"]
    assert calls[0].url.params["committee_id"] == "C00000001"
    assert calls[0].url.params["two_year_transaction_period"] == "2024"
    assert calls[0].url.params["per_page"] == "100"
    assert "candidate_id" not in calls[0].url.params
    assert fetcher.stats["pages"] == 2
    assert fetcher.partial is False


@pytest.mark.asyncio
async def test_contributions_by_candidate(fec):
    fec.add("/schedules/schedule_a/", paged([[contribution("A", 100)]]))
    await ContributionFetcher(fec.client()).run(candidate_id="S2UT00106", cycle=2024)
    assert fec.calls[0].url.params["candidate_id"] == "S2UT00106"


@pytest.mark.asyncio
async def test_requires_a_source(fec):
    with pytest.raises(ValueError):
        await ContributionFetcher(fec.client()).run(cycle=2024)


@pytest.mark.asyncio
async def test_page_cap(fec):
    fec.add("/schedules/schedule_a/", paged([[contribution("A", 1)]] * 50))
    items = await ContributionFetcher(fec.client(), max_pages=20).run(committee_id="C1", cycle=2024)
    assert len(items) == 20
    assert len(fec.calls) == 20


@pytest.mark.asyncio
async def test_first_page_failure_raises(fec):
    fec.add("/schedules/schedule_a/", paged([[contribution("A", 1)]], fail_on={1}, status=500))
    with pytest.raises(UpstreamFailureError):
        await ContributionFetcher(fec.client()).run(committee_id="C1", cycle=2024)


@pytest.mark.asyncio
async def test_later_page_failure_keeps_earlier_pages(fec):
    fec.add("/schedules/schedule_a/", paged(
        [[contribution("A", 10)], [contribution("B", 20)], [contribution("C", 30)]],
        fail_on={2},
    ))
    fetcher = ContributionFetcher(fec.client())

    items = await fetcher.run(committee_id="C1", cycle=2024)

    assert [c.donor_name for c in items] == ["A"]
    assert fetcher.partial is True
    assert fetcher.last_error.upstream_status == 500


@pytest.mark.asyncio
async def test_unknown_industry_label(fec):
    fec.add("/schedules/schedule_a/", paged([[contribution("A", 10)]]))
    fetcher = ContributionFetcher(fec.client(), unknown_industry="Unknown Industry")
    items = await fetcher.run(committee_id="C1", cycle=2024)
    assert items[0].industry == "Unknown Industry"
    assert items[0].amount == Decimal("10")


# ---------------------------------------------------------------------------
# Candidate directory
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_directory_transforms_and_drops_invalid_ids(fec):
    fec.add("/candidates/", paged([[
        candidate("h2ut01234", name="SMITH, ANN", party="REP", district="01", incumbent_challenge="I"),
        candidate(None, name="NO ID"),
        candidate("X123", name="BAD PREFIX"),
        candidate("H2UT05678", party="XYZ", district="at-large"),
    ]]))
    fetcher = CandidateDirectoryFetcher(fec.client(), Office.REPRESENTATIVE)

    reps = await fetcher.run(election_year=2024)

    assert [r.candidate_id for r in reps] == ["H2UT01234", "H2UT05678"]
    first = reps[0]
    assert first.id == "H2UT01234"
    assert first.party == Party.REPUBLICAN
    assert first.district == "1"
    assert first.is_incumbent is True
    assert first.profile_url == "https://www.fec.gov/data/candidate/H2UT01234/"
    assert reps[1].party == Party.OTHER
    assert reps[1].district is None
    assert fetcher.stats["dropped"] == 2

    params = fec.calls[0].url.params
    assert params["office"] == "H"
    assert params["election_year"] == "2024"
    assert params["candidate_status"] == "C"


@pytest.mark.asyncio
async def test_senators_have_no_district(fec):
    fec.add("/candidates/", paged([[candidate("S2UT00106", district="00")]]))
    senators = await CandidateDirectoryFetcher(fec.client(), Office.SENATOR).run(election_year=2024)
    assert senators[0].district is None
    assert senators[0].office == Office.SENATOR


@pytest.mark.asyncio
async def test_directory_first_page_failure_is_not_fatal(fec):
    fec.add("/candidates/", paged([[candidate("S2UT00106")]], fail_on={1}))
    fetcher = CandidateDirectoryFetcher(fec.client(), Office.SENATOR)
    assert await fetcher.run(election_year=2024) == []
    assert fetcher.partial is True


# ---------------------------------------------------------------------------
# Committees
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_resolves_unique_committees(fec):
    fec.add("/candidate/S2UT00106/committees/", lambda request: results([
        {"committee_id": "C001", "name": "LEE FOR SENATE", "designation": "P"},
        {"committee_id": "C002", "name": "LEE VICTORY FUND", "designation": "J"},
        {"committee_id": "C001"},
        {"name": "no id"},
    ]))
    committees = await CommitteeResolver(fec.client()).resolve("S2UT00106", 2024)

    assert [c.committee_id for c in committees] == ["C001", "C002"]
    assert committees[0].designation == "P"
    assert fec.calls[0].url.params["cycle"] == "2024"


@pytest.mark.asyncio
async def test_committee_failure_resolves_to_empty(fec):
    fec.add("/candidate/S2UT00106/committees/", lambda request: httpx.Response(500))
    resolver = CommitteeResolver(fec.client())

    assert await resolver.resolve("S2UT00106", 2024) == []
    assert resolver.last_error.upstream_status == 500


@pytest.mark.asyncio
async def test_malformed_committees_are_skipped(fec):
    fec.add("/candidate/S2UT00106/committees/", lambda request: results([
        "C000",
        {"committee_id": 123},
        {"committee_id": ["C003"]},
        {"committee_id": "C004", "name": {"full": "BAD NAME"}},
        {"committee_id": "C001", "name": "LEE FOR SENATE"},
    ]))

    committees = await CommitteeResolver(fec.client()).resolve("S2UT00106", 2024)

    assert [c.committee_id for c in committees] == ["C001"]


@pytest.mark.asyncio
async def test_directory_tolerates_odd_field_types(fec):
    fec.add("/candidates/", paged([[
        candidate("S2UT00106", party=5),
        {**candidate("S2UT00107"), "name": 42},
        "S2UT00108",
    ]]))
    fetcher = CandidateDirectoryFetcher(fec.client(), Office.SENATOR)

    senators = await fetcher.run(election_year=2024)

    assert [s.candidate_id for s in senators] == ["S2UT00106"]
    assert senators[0].party == Party.OTHER
    assert fetcher.stats["dropped"] == 1
