"""
Dispatch Analytics
==================

Business analytics for an auto-claims inspection practice: payout forecasting
from firm pay cycles, cash-flow and capacity reports, firm dependency and
value reports, seasonality, and a monthly performance history.
"""
