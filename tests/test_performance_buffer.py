"""Tests for the rolling performance buffer behind the chart."""

from datetime import datetime

import pytest

from core.models import ChartSample, PerformanceBuffer


def make_sample(i: int) -> ChartSample:
    return ChartSample(time=f"10:00:{i:02d}", total_value=1000.0 + i, portfolio_value=400.0 + i, cash=600.0)


def test_length_never_exceeds_capacity():
    buf = PerformanceBuffer(capacity=30)
    for i in range(100):
        buf.push(make_sample(i % 60))
        assert len(buf) <= 30
    assert len(buf) == 30


def test_31_pushes_keep_last_30_in_order():
    buf = PerformanceBuffer()
    samples = [make_sample(i) for i in range(31)]
    for s in samples:
        buf.push(s)

    assert buf.samples == samples[1:]
    assert buf.labels[0] == "10:00:01"
    assert buf.labels[-1] == "10:00:30"


def test_eviction_drops_exactly_one_head_sample():
    buf = PerformanceBuffer(capacity=3)
    for i in range(3):
        buf.push(make_sample(i))
    buf.push(make_sample(3))
    assert [s.time for s in buf] == ["10:00:01", "10:00:02", "10:00:03"]


def test_projections_are_live_views():
    buf = PerformanceBuffer(capacity=2)
    buf.push(make_sample(1))
    first = buf.total_values
    buf.push(make_sample(2))
    buf.push(make_sample(3))

    assert first == [1001.0]
    assert buf.total_values == [1002.0, 1003.0]
    assert buf.portfolio_values == [402.0, 403.0]
    assert buf.cash_values == [600.0, 600.0]
    assert len(buf.labels) == len(buf.total_values) == len(buf.cash_values)


def test_series_contract():
    buf = PerformanceBuffer()
    buf.push(make_sample(5))
    series = buf.series()

    assert series["labels"] == ["10:00:05"]
    assert [d["label"] for d in series["datasets"]] == ["Total Value", "Portfolio", "Cash"]
    assert series["datasets"][1]["data"] == [405.0]


def test_empty_buffer():
    buf = PerformanceBuffer()
    assert len(buf) == 0
    assert buf.latest is None
    assert buf.series()["labels"] == []


def test_invalid_capacity():
    with pytest.raises(ValueError):
        PerformanceBuffer(capacity=0)


def test_sample_from_portfolio_excludes_cash():
    now = datetime(2026, 10, 19, 11, 5, 9)
    sample = ChartSample.from_portfolio({"value": "1000.5", "cash": 400}, now=now)

    assert sample.time == "11:05:09"
    assert sample.total_value == 1000.5
    assert sample.cash == 400.0
    assert sample.portfolio_value == pytest.approx(600.5)


def test_sample_from_portfolio_defaults_missing_fields():
    sample = ChartSample.from_portfolio({"cash": None})
    assert sample.total_value == 0.0
    assert sample.cash == 0.0
    assert sample.portfolio_value == 0.0


def test_sample_from_non_object_payload():
    assert ChartSample.from_portfolio(None) is None
    assert ChartSample.from_portfolio([1, 2]) is None
