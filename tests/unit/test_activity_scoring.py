from datetime import timedelta

import pytest

from crm_intel.features.engagement.pipeline.contact_scoring import ActivityScoringService, score_contacts
from crm_intel.features.engagement.pipeline.contact_scoring.activity import ACTIVITY_TIERS, ActivitySummary


@pytest.fixture
def service():
    return ActivityScoringService()


def test_contact_without_events_is_at_risk(service, make_contact, now):
    scored = service.score_contacts([make_contact()], [], now=now)

    assert scored[0].score == 20
    assert scored[0].tier == "At-Risk"
    assert scored[0].opens == 0


def test_recent_opens_and_clicks_reach_champion(service, make_contact, make_event, now):
    contact = make_contact(email="Reader@Example.com")
    events = [make_event(opened_at=now - timedelta(days=2), contact_email="reader@example.com")
              for _ in range(5)]
    events += [
        make_event(
            opened_at=now - timedelta(days=3),
            clicked_at=now - timedelta(days=3),
            contact_email="READER@example.com",
        )
        for _ in range(2)
    ]

    scored = service.score_contacts([contact], events, now=now)[0]

    # 50 + min(20, 7*2) + min(25, 2*5) + 10 recent
    assert scored.opens == 7
    assert scored.clicks == 2
    assert scored.score == 84
    assert scored.tier == "Champion"


def test_open_bonus_is_capped(service, now):
    summary = ActivitySummary(
        contact_email="a@example.com", opens_30d=15, last_activity_at=now - timedelta(days=20)
    )
    assert service.score_activity(summary, now) == 70


@pytest.mark.parametrize(
    "inactive_days, expected",
    [(10, 50), (31, 40), (61, 30), (91, 20)],
)
def test_inactivity_penalties(service, now, inactive_days, expected):
    summary = ActivitySummary(
        contact_email="a@example.com", last_activity_at=now - timedelta(days=inactive_days)
    )
    assert service.score_activity(summary, now) == expected


def test_events_outside_thirty_days_only_update_last_activity(service, make_event, now):
    events = [make_event(opened_at=now - timedelta(days=45))]

    summary = service.summarize(events, now)["contact@example.com"]

    assert summary.opens_30d == 0
    assert summary.last_activity_at == now - timedelta(days=45)


@pytest.mark.parametrize(
    "score, tier",
    [(80, "Champion"), (79, "Loyal"), (60, "Loyal"), (59, "Potential"), (40, "Potential"),
     (39, "At-Risk"), (20, "At-Risk"), (19, "Dormant"), (0, "Dormant")],
)
def test_activity_tiers(score, tier):
    assert ActivityScoringService.activity_tier(score) == tier


def test_tier_distribution_lists_every_tier(service, make_contact, now):
    scored = service.score_contacts([make_contact(), make_contact()], [], now=now)

    distribution = service.tier_distribution(scored)

    assert distribution == {"Champion": 0, "Loyal": 0, "Potential": 0, "At-Risk": 2, "Dormant": 0}


def test_profile_model_is_the_default(make_contact, now):
    scored = score_contacts([make_contact(days_ago=5)], now=now)

    assert scored[0].score == 90
    assert scored[0].tier == "Champion"


def test_activity_model_is_selected_by_name(make_contact, make_event, now):
    contacts = [make_contact(email="a@example.com"), make_contact(email="b@example.com")]
    events = [make_event(opened_at=now - timedelta(days=1), contact_email="a@example.com")]

    scored = score_contacts(contacts, events, model="activity", limit=1, now=now)

    assert len(scored) == 1
    assert scored[0].opens == 1
    assert scored[0].tier in ACTIVITY_TIERS


def test_unknown_model_is_rejected(make_contact, now):
    with pytest.raises(ValueError):
        score_contacts([make_contact()], model="magic", now=now)


def test_mixed_naive_and_aware_timestamps(service, make_contact, make_event, now):
    opened = (now - timedelta(days=3)).replace(tzinfo=None)
    clicked = now - timedelta(days=2)
    event = make_event(opened_at=opened, clicked_at=clicked, contact_email="contact@example.com")

    assert event.last_engaged_at == clicked

    summary = service.summarize([event], now=now)["contact@example.com"]
    assert summary.opens_30d == 1
    assert summary.clicks_30d == 1
    assert summary.last_activity_at == clicked
