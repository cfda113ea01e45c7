from datetime import date, datetime

from conftest import completed_claim, make_claim

from dispatch_analytics.definitions.custom_definitions import ClaimStatus
from dispatch_analytics.models.payout_models import PayoutPeriod
from dispatch_analytics.payouts.forecasting import (
    forecast_payouts,
    get_monthly_view,
    get_next_week_payouts,
    get_payout_summary,
    get_payouts_for_month,
    get_payouts_for_week,
    get_this_month_payouts,
    get_this_week_payouts,
    get_upcoming_payouts,
    get_weekly_view,
)


def _claims():
    return [
        completed_claim("Sedgwick", date(2025, 1, 6), 250.0),
        make_claim(
            firm_name="SEDGWK 99",
            status=ClaimStatus.SCHEDULED,
            appointment_start=datetime(2025, 1, 7, 9, 30),
        ),
        completed_claim("ACD", date(2025, 1, 10), 300.0),
        completed_claim("HEA", date(2025, 1, 20), 410.0),
        completed_claim("SCA", date(2025, 1, 6), 500.0),
        completed_claim("Nobody Adjusting", date(2025, 1, 6), 500.0),
        make_claim(firm_name="Sedgwick", status=ClaimStatus.UNASSIGNED),
    ]


def test_forecast_groups_claims_by_firm_and_payout_date(registry):
    payouts = forecast_payouts(_claims(), registry)

    assert [(p.firm, p.payout_date) for p in payouts] == [
        ("Sedgwick", date(2025, 1, 8)),
        ("ACD", date(2025, 1, 15)),
        ("HEA", date(2025, 2, 17)),
    ]
    sedgwick = payouts[0]
    # completed at its file total, scheduled at the base fee
    assert sedgwick.total_expected == 450.0
    assert sedgwick.claim_count == 2
    assert sedgwick.period_start == date(2025, 1, 1)
    assert sedgwick.period_end == date(2025, 1, 7)


def test_forecast_skips_non_recurring_and_unknown_firms(registry):
    firms = {p.firm for p in forecast_payouts(_claims(), registry)}
    assert "SCA" not in firms
    assert "Nobody Adjusting" not in firms


def test_forecast_uses_agreed_pay_for_scheduled_claims(registry):
    claim = make_claim(
        firm_name="Doan",
        status=ClaimStatus.SCHEDULED,
        appointment_start=datetime(2025, 1, 13, 8),
        pay_amount=222.0,
    )
    (payout,) = forecast_payouts([claim], registry)
    assert payout.total_expected == 222.0
    assert payout.payout_date == date(2025, 1, 16)


def test_forecast_work_dates_fall_inside_their_periods(registry):
    claims = [completed_claim("Legacy", date(2025, 1, day), 100.0) for day in range(1, 29)]
    payouts = forecast_payouts(claims, registry)
    assert sum(p.claim_count for p in payouts) == 28
    by_id = {claim.id: claim for claim in claims}
    for payout in payouts:
        for claim_id in payout.claim_ids:
            work_date = by_id[claim_id].completion_date.date()
            assert payout.period_start <= work_date <= payout.period_end


def test_weekly_and_monthly_views(registry):
    payouts = forecast_payouts(_claims(), registry)

    weeks = get_weekly_view(payouts)
    assert [w.week_start for w in weeks] == [date(2025, 1, 6), date(2025, 1, 13), date(2025, 2, 17)]
    assert weeks[0].week_end == date(2025, 1, 12)
    assert weeks[0].total_amount == 450.0

    months = get_monthly_view(payouts)
    assert [(m.year, m.month, m.month_name) for m in months] == [(2025, 1, "Jan"), (2025, 2, "Feb")]
    assert months[0].by_firm == {"Sedgwick": 450.0, "ACD": 300.0}


def test_week_filter_is_inclusive_on_both_ends(registry):
    payouts = forecast_payouts(
        [
            completed_claim("IANET", date(2025, 8, 5), 100.0),  # paid Mon 2025-09-01
            completed_claim("ACD", date(2025, 9, 3), 100.0),  # paid Mon 2025-09-15
        ],
        registry,
    )
    assert [p.firm for p in get_payouts_for_week(payouts, date(2025, 9, 3))] == ["IANET"]
    assert get_payouts_for_week(payouts, date(2025, 9, 8)) == []
    assert len(get_payouts_for_week(payouts, date(2025, 9, 21))) == 1


def test_relative_period_filters(registry):
    payouts = forecast_payouts(_claims(), registry)
    as_of = date(2025, 1, 8)

    assert [p.firm for p in get_this_week_payouts(payouts, as_of)] == ["Sedgwick"]
    assert [p.firm for p in get_next_week_payouts(payouts, as_of)] == ["ACD"]
    assert len(get_this_month_payouts(payouts, as_of)) == 2
    assert len(get_payouts_for_month(payouts, 2025, 2)) == 1
    assert [p.firm for p in get_upcoming_payouts(payouts, days=7, as_of=as_of)] == ["Sedgwick", "ACD"]
    assert get_upcoming_payouts(payouts, days=30, as_of=date(2025, 3, 1)) == []


def test_payout_summary(registry):
    summary = get_payout_summary(forecast_payouts(_claims(), registry))
    assert summary.total_amount == 1160.0
    assert summary.payout_count == 3
    assert summary.claim_count == 4


def test_claims_on_period_boundaries(registry):
    on_start = completed_claim("Sedgwick", date(2025, 1, 1), 100.0)
    on_end = completed_claim("Sedgwick", date(2025, 1, 7), 100.0)
    day_before = completed_claim("Sedgwick", date(2024, 12, 31), 100.0)

    previous, current = forecast_payouts([on_start, on_end, day_before], registry)

    assert (current.period_start, current.period_end, current.payout_date) == (
        date(2025, 1, 1),
        date(2025, 1, 7),
        date(2025, 1, 8),
    )
    assert current.claim_ids == [on_start.id, on_end.id]
    assert previous.period_end == date(2024, 12, 31)
    assert previous.payout_date == date(2025, 1, 1)
    assert previous.claim_ids == [day_before.id]


def test_forecast_drops_claims_outside_their_period(registry, monkeypatch):
    monkeypatch.setattr(
        "dispatch_analytics.payouts.forecasting.get_pay_period",
        lambda firm, work_date, registry: PayoutPeriod(
            period_start=date(2025, 2, 1),
            period_end=date(2025, 2, 7),
            payout_date=date(2025, 2, 12),
        ),
    )
    assert forecast_payouts([completed_claim("Sedgwick", date(2025, 1, 6), 250.0)], registry) == []
