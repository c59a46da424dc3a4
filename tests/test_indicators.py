"""Tests for datahub/indicators.py"""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from datahub.indicators import (
    atr,
    bollinger,
    compute_snapshot,
    macd,
    rsi,
    sma,
    true_range,
)

from .conftest import random_walk


class TestMovingAverages:
    def test_sma_last_value(self):
        series = pd.Series([1.0, 2.0, 3.0, 4.0, 5.0])
        assert sma(series, 2).iloc[-1] == pytest.approx(4.5)
        assert np.isnan(sma(series, 2).iloc[0])

    def test_sma_rejects_short_input(self):
        with pytest.raises(ValueError):
            sma(pd.Series([1.0, 2.0]), 5)


class TestRSI:
    def test_all_gains_is_100(self):
        series = pd.Series([float(i) for i in range(1, 40)])
        assert rsi(series).iloc[-1] == pytest.approx(100.0)

    def test_all_losses_is_0(self):
        series = pd.Series([float(100 - i) for i in range(40)])
        assert rsi(series).iloc[-1] == pytest.approx(0.0)

    def test_flat_series_is_neutral(self):
        series = pd.Series([42.0] * 40)
        assert rsi(series).iloc[-1] == pytest.approx(50.0)

    def test_bounded(self):
        values = rsi(pd.Series(random_walk(3, 200)))
        assert values.between(0, 100).all()

    def test_first_value_is_simple_average_seed(self):
        # 14 changes: seven +1, seven -1 -> avg gain == avg loss -> 50
        closes = [10.0]
        for i in range(14):
            closes.append(closes[-1] + (1.0 if i % 2 == 0 else -1.0))
        assert rsi(pd.Series(closes)).iloc[0] == pytest.approx(50.0)


class TestMACD:
    def test_constant_series_is_zero(self):
        line, signal, hist = macd(pd.Series([100.0] * 60))
        assert line.iloc[-1] == pytest.approx(0.0)
        assert signal.iloc[-1] == pytest.approx(0.0)
        assert hist.iloc[-1] == pytest.approx(0.0)

    def test_uptrend_line_is_positive(self):
        line, _, _ = macd(pd.Series([100.0 + i for i in range(300)]))
        # EMA12 lags a unit slope by 5.5 bars, EMA26 by 12.5
        assert line.iloc[-1] == pytest.approx(7.0, abs=1e-3)

    def test_histogram_is_line_minus_signal(self):
        line, signal, hist = macd(pd.Series(random_walk(5, 120)))
        assert hist.iloc[-1] == pytest.approx(line.iloc[-1] - signal.iloc[-1])


class TestBollinger:
    def test_constant_series_collapses(self):
        mid, upper, lower = bollinger(pd.Series([50.0] * 30))
        assert upper.iloc[-1] == pytest.approx(50.0)
        assert lower.iloc[-1] == pytest.approx(50.0)
        assert mid.iloc[-1] == pytest.approx(50.0)

    def test_bands_are_symmetric(self):
        mid, upper, lower = bollinger(pd.Series(random_walk(9, 80)))
        assert upper.iloc[-1] - mid.iloc[-1] == pytest.approx(mid.iloc[-1] - lower.iloc[-1])
        assert upper.iloc[-1] > lower.iloc[-1]


class TestATR:
    def test_true_range_drops_first_bar(self):
        close = pd.Series([10.0, 11.0, 9.0])
        tr = true_range(close, close, close)
        assert tr.tolist() == [1.0, 2.0]

    def test_constant_range(self):
        close = pd.Series([100.0] * 60)
        value = atr(close + 1.0, close - 1.0, close, 14).iloc[-1]
        assert value == pytest.approx(2.0)

    def test_flat_close_only_is_zero(self):
        close = pd.Series([100.0] * 60)
        assert atr(close, close, close, 14).iloc[-1] == pytest.approx(0.0)


class TestSnapshot:
    def test_labels_follow_averages(self, uptrend_daily, uptrend_weekly):
        snapshot = compute_snapshot(uptrend_daily, uptrend_weekly)
        assert snapshot.trend_daily == "BULL"
        assert snapshot.trend_weekly == "BULL"
        assert snapshot.price == uptrend_daily[-1]
        assert snapshot.atr == pytest.approx(1.0)
        assert snapshot.atr_baseline == pytest.approx(1.0)

    def test_ties_are_bearish(self, flat_daily, flat_weekly):
        snapshot = compute_snapshot(flat_daily, flat_weekly)
        assert snapshot.trend_daily == "BEAR"
        assert snapshot.trend_weekly == "BEAR"

    def test_uses_true_highs_and_lows(self, flat_daily, flat_weekly):
        highs = [value + 1.0 for value in flat_daily]
        lows = [value - 1.0 for value in flat_daily]
        snapshot = compute_snapshot(flat_daily, flat_weekly, highs, lows)
        assert snapshot.atr == pytest.approx(2.0)

    def test_mismatched_highs_rejected(self, flat_daily, flat_weekly):
        with pytest.raises(ValueError):
            compute_snapshot(flat_daily, flat_weekly, highs=flat_daily[:-1])
