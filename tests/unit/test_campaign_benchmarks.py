import pytest

from crm_intel.features.engagement.domain import SnapshotContractError
from crm_intel.features.engagement.pipeline.benchmarks import CampaignBenchmarkService


@pytest.fixture
def service():
    return CampaignBenchmarkService()


def test_engagement_score_weights_rates(service, make_campaign):
    campaign = make_campaign(open_rate=30, click_rate=5, bounce_rate=1)
    assert service.engagement_score(campaign) == pytest.approx(14.4)


def test_engagement_score_is_floored_at_zero(service, make_campaign):
    campaign = make_campaign(open_rate=0, click_rate=0, bounce_rate=40)
    assert service.engagement_score(campaign) == 0.0


def test_no_eligible_campaigns_returns_zeroes(service, make_campaign):
    campaigns = [
        make_campaign(status="draft"),
        make_campaign(status="sent", sent=0, delivered=0),
        make_campaign(status="queued"),
    ]

    result = service.benchmark(campaigns)

    assert result.total_campaigns == 0
    assert result.averages.open_rate == 0
    assert result.averages.click_rate == 0
    assert result.averages.bounce_rate == 0
    assert result.averages.unsubscribe_rate == 0
    assert result.top_performers == []
    assert result.bottom_performers == []
    assert result.industry_benchmarks.open_rate == 21.5
    assert result.performance_delta.vs_industry_open == 0


def test_empty_input_is_not_an_error(service):
    assert service.benchmark([]).total_campaigns == 0


def test_averages_come_from_summed_statistics(service, make_campaign):
    campaigns = [
        make_campaign(sent=1000, delivered=900, unique_opens=300, unique_clicks=30,
                      hard_bounces=60, soft_bounces=40, unsubscribes=9),
        make_campaign(sent=1000, delivered=1100, unique_opens=200, unique_clicks=20,
                      hard_bounces=0, soft_bounces=0, unsubscribes=1),
        make_campaign(status="draft", sent=5000, delivered=5000, unique_opens=5000),
    ]

    result = service.benchmark(campaigns)

    assert result.total_campaigns == 2
    assert result.averages.open_rate == 25.0
    assert result.averages.click_rate == 2.5
    assert result.averages.bounce_rate == 5.0
    assert result.averages.unsubscribe_rate == 0.5
    assert result.performance_delta.vs_industry_open == pytest.approx(3.5)
    assert result.performance_delta.vs_industry_click == pytest.approx(0.2)


def test_zero_delivered_guards_division(service, make_campaign):
    result = service.benchmark([make_campaign(sent=100, delivered=0, hard_bounces=100)])

    assert result.total_campaigns == 1
    assert result.averages.open_rate == 0
    assert result.averages.bounce_rate == 100.0


def test_top_and_bottom_performers_with_true_ranks(service, make_campaign):
    campaigns = [make_campaign(open_rate=float(rate), click_rate=0, bounce_rate=0) for rate in range(1, 13)]

    result = service.benchmark(campaigns)

    assert result.total_campaigns == 12
    assert [c.rank for c in result.top_performers] == [1, 2, 3, 4, 5]
    assert [c.open_rate for c in result.top_performers] == [12, 11, 10, 9, 8]
    assert [c.rank for c in result.bottom_performers] == [8, 9, 10, 11, 12]
    assert [c.open_rate for c in result.bottom_performers] == [5, 4, 3, 2, 1]
    assert result.bottom_performers[-1].campaign_id == campaigns[0].campaign_id


def test_small_sets_overlap_between_top_and_bottom(service, make_campaign):
    campaigns = [make_campaign(open_rate=rate) for rate in (10, 30, 20)]

    result = service.benchmark(campaigns)

    top_ids = [c.campaign_id for c in result.top_performers]
    bottom_ids = [c.campaign_id for c in result.bottom_performers]
    assert top_ids == bottom_ids
    assert [c.rank for c in result.bottom_performers] == [1, 2, 3]


def test_ties_keep_input_order(service, make_campaign):
    campaigns = [make_campaign(open_rate=10, click_rate=0, bounce_rate=0) for _ in range(3)]

    result = service.benchmark(campaigns)

    assert [c.campaign_id for c in result.top_performers] == [c.campaign_id for c in campaigns]


def test_performer_details_are_carried(service, make_campaign):
    campaign = make_campaign(open_rate=33.333, click_rate=4.444, bounce_rate=0.5,
                             sent=500, unique_opens=160, unique_clicks=21)

    ranked = service.benchmark([campaign]).top_performers[0]

    assert ranked.campaign_name == campaign.name
    assert ranked.subject == campaign.subject
    assert ranked.sent_date == campaign.sent_date
    assert ranked.open_rate == 33.33
    assert ranked.click_rate == 4.44
    assert ranked.total_sent == 500
    assert ranked.unique_opens == 160
    assert ranked.unique_clicks == 21


def test_industry_reference_values_are_fixed():
    industry = CampaignBenchmarkService.industry_benchmarks()

    assert (industry.open_rate, industry.click_rate, industry.bounce_rate, industry.unsubscribe_rate) == (
        21.5,
        2.3,
        0.7,
        0.25,
    )


def test_rejects_non_collection(service):
    with pytest.raises(SnapshotContractError):
        service.benchmark(None)
