"""Property-based tests for the position sizing engine.

**Feature: tradeguard**
"""

import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradeguard.engine.instruments import INSTRUMENT_REGISTRY, get_instrument, list_instruments
from tradeguard.engine.sizing import calculate_risk_per_trade, calculate_sizing
from tradeguard.models import (
    AccountRiskSettings,
    CalcMode,
    DEFAULT_RISK_SETTINGS,
    TargetMode,
)


def risk_settings_strategy():
    """Generate arbitrary, possibly degenerate, risk settings."""
    return st.builds(
        AccountRiskSettings,
        max_daily_risk=st.floats(min_value=0, max_value=100000, allow_nan=False),
        max_trades_per_day=st.integers(min_value=0, max_value=20),
        max_contracts_per_trade=st.integers(min_value=0, max_value=50),
        calc_mode=st.sampled_from(list(CalcMode)),
        target_mode=st.sampled_from(list(TargetMode)),
        rr_ratio=st.floats(min_value=0, max_value=10, allow_nan=False),
        fixed_sl_points=st.floats(min_value=0, max_value=500, allow_nan=False),
        fixed_target_points=st.floats(min_value=0, max_value=1000, allow_nan=False),
        comm_per_contract=st.floats(min_value=0, max_value=10, allow_nan=False),
        preferred_instrument=st.sampled_from(list(INSTRUMENT_REGISTRY.keys()) + ["XYZ", ""]),
    )


class TestRiskPerTrade:
    """
    **Feature: tradeguard, Property 1: Risk Per Trade Split**

    *For any* daily risk and trades per day >= 1, risk per trade is the
    daily risk divided by the trade count, rounded half up.
    """

    @given(
        max_daily_risk=st.integers(min_value=0, max_value=100000),
        trades_per_day=st.integers(min_value=1, max_value=50),
    )
    @settings(max_examples=200)
    def test_rounded_split(self, max_daily_risk: int, trades_per_day: int):
        expected = (2 * max_daily_risk + trades_per_day) // (2 * trades_per_day)
        assert calculate_risk_per_trade(max_daily_risk, trades_per_day) == expected

    def test_halves_round_up(self):
        assert calculate_risk_per_trade(5, 2) == 3
        assert calculate_risk_per_trade(1000, 3) == 333

    def test_zero_trades_per_day_counts_as_one(self):
        assert calculate_risk_per_trade(500, 0) == 500
        assert calculate_risk_per_trade(500, None) == 500


class TestFixedContractsSizing:
    """Tests for sizing with a fixed contract count."""

    def test_fallback_profile(self):
        result = calculate_sizing(DEFAULT_RISK_SETTINGS)

        assert result.instrument == "MNQ"
        assert result.risk_per_trade == 100
        assert result.lots == 1
        assert result.sl_points == 50
        assert result.tp_points == 100
        assert result.commissions_per_trade == pytest.approx(4.8)
        assert result.target_net == pytest.approx(195.2)
        assert result.daily_potential == pytest.approx(976.0)

    def test_missing_settings_use_fallback_profile(self):
        assert calculate_sizing(None) == calculate_sizing(DEFAULT_RISK_SETTINGS)

    def test_stop_snaps_to_tick(self):
        risk = AccountRiskSettings(
            max_daily_risk=333,
            max_trades_per_day=1,
            max_contracts_per_trade=1,
            preferred_instrument="GC",
        )
        result = calculate_sizing(risk)

        assert result.sl_points == pytest.approx(3.3)
        assert result.tp_points == pytest.approx(6.6)

    def test_zero_contracts_defaults_to_one(self):
        risk = AccountRiskSettings(max_contracts_per_trade=0)
        assert calculate_sizing(risk).lots == 1

    def test_negative_contracts_treated_as_one(self):
        result = calculate_sizing(AccountRiskSettings(max_contracts_per_trade=-3))

        assert result.lots == 1
        assert result.sl_points == 50


class TestFixedStopSizing:
    """Tests for sizing with a fixed stop distance."""

    def test_lots_floor_from_stop(self):
        risk = AccountRiskSettings(
            max_daily_risk=1000,
            max_trades_per_day=2,
            calc_mode=CalcMode.FIXED_SL,
            fixed_sl_points=20,
            preferred_instrument="MNQ",
        )
        result = calculate_sizing(risk)

        assert result.risk_per_trade == 500
        assert result.lots == 12
        assert result.sl_points == 20
        assert result.tp_points == 40
        assert result.commissions_per_trade == pytest.approx(57.6)
        assert result.target_net == pytest.approx(902.4)

    def test_stop_too_wide_still_trades_one_lot(self):
        risk = AccountRiskSettings(
            max_daily_risk=1000,
            max_trades_per_day=2,
            calc_mode=CalcMode.FIXED_SL,
            fixed_sl_points=20,
            preferred_instrument="ES",
        )
        assert calculate_sizing(risk).lots == 1

    def test_zero_stop_does_not_divide_by_zero(self):
        risk = AccountRiskSettings(calc_mode=CalcMode.FIXED_SL, fixed_sl_points=0)
        result = calculate_sizing(risk)

        # Unset stop falls back to the default 25 points
        assert result.sl_points == 25
        assert result.lots == 2
        assert result.tp_points == 50
        assert result.target_net > 0

    @given(max_daily_risk=st.integers(min_value=50, max_value=5000))
    @settings(max_examples=100)
    def test_zero_stop_sizes_with_reported_stop(self, max_daily_risk: int):
        risk = AccountRiskSettings(
            max_daily_risk=max_daily_risk,
            max_trades_per_day=1,
            calc_mode=CalcMode.FIXED_SL,
            fixed_sl_points=0,
        )
        result = calculate_sizing(risk)

        assert result.sl_points > 0
        assert result.lots == max(math.floor(result.risk_per_trade / (result.sl_points * 2)), 1)
        if result.risk_per_trade % 50 == 0:
            assert result.lots * result.sl_points * 2 == pytest.approx(result.risk_per_trade)

    def test_unset_target_fields_use_defaults(self):
        by_rr = calculate_sizing(AccountRiskSettings(rr_ratio=0))
        by_points = calculate_sizing(AccountRiskSettings(
            target_mode=TargetMode.FIXED_TARGET_POINTS,
            fixed_target_points=0,
        ))

        assert by_rr.tp_points == by_rr.sl_points * 2
        assert by_points.tp_points == 50

    def test_unset_commission_uses_default(self):
        result = calculate_sizing(AccountRiskSettings(comm_per_contract=0))
        assert result.commissions_per_trade == pytest.approx(4.8)

    def test_fixed_target_points(self):
        risk = AccountRiskSettings(
            target_mode=TargetMode.FIXED_TARGET_POINTS,
            fixed_target_points=30,
        )
        assert calculate_sizing(risk).tp_points == 30

    def test_instrument_override(self):
        result = calculate_sizing(DEFAULT_RISK_SETTINGS, get_instrument("NQ"))

        assert result.instrument == "NQ"
        assert result.sl_points == 5


class TestSizingRoundTrip:
    """
    **Feature: tradeguard, Property 2: Sizing Round Trip**

    *For any* plan where the risk per trade is exactly lots x stop x multiplier,
    fixed-contracts and fixed-stop sizing re-derive each other within one tick.
    """

    @given(
        lots=st.integers(min_value=1, max_value=10),
        sl_points=st.integers(min_value=1, max_value=100),
        symbol=st.sampled_from(["MNQ", "NQ", "MES", "ES"]),
    )
    @settings(max_examples=200)
    def test_round_trip_within_tick(self, lots: int, sl_points: int, symbol: str):
        spec = get_instrument(symbol)
        risk_per_trade = lots * sl_points * int(spec.multiplier)

        by_contracts = calculate_sizing(AccountRiskSettings(
            max_daily_risk=risk_per_trade,
            max_trades_per_day=1,
            max_contracts_per_trade=lots,
            calc_mode=CalcMode.FIXED_CONTRACTS,
            preferred_instrument=symbol,
        ))
        by_stop = calculate_sizing(AccountRiskSettings(
            max_daily_risk=risk_per_trade,
            max_trades_per_day=1,
            calc_mode=CalcMode.FIXED_SL,
            fixed_sl_points=by_contracts.sl_points,
            preferred_instrument=symbol,
        ))

        assert abs(by_contracts.sl_points - sl_points) <= spec.tick
        assert by_stop.lots == lots


class TestSizingTotality:
    """
    **Feature: tradeguard, Property 3: Sizing Never Fails**

    *For any* risk settings, sizing returns finite values and at least one lot.
    """

    @given(risk=risk_settings_strategy())
    @settings(max_examples=200)
    def test_finite_results(self, risk: AccountRiskSettings):
        result = calculate_sizing(risk)

        assert result.lots >= 1
        for value in (
            result.sl_points,
            result.tp_points,
            result.commissions_per_trade,
            result.target_net,
            result.daily_potential,
        ):
            assert math.isfinite(value)


class TestInstrumentRegistry:
    """Tests for the static instrument registry."""

    def test_known_instruments(self):
        assert get_instrument("ES").multiplier == 50
        assert get_instrument("gc").tick == pytest.approx(0.10)

    def test_unknown_instrument_falls_back_to_mnq(self):
        assert get_instrument("XYZ").symbol == "MNQ"
        assert get_instrument(None).symbol == "MNQ"

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            INSTRUMENT_REGISTRY["ZZ"] = get_instrument("ES")

    def test_listed_symbols(self):
        assert list_instruments() == ["MNQ", "NQ", "MES", "ES", "GC", "BTCUSDT"]
