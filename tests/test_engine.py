"""Bonding curve engine unit tests."""

import math

import pytest

from blippmarket.curve.engine import (
    BondingCurveEngine,
    apply_buy,
    apply_sell,
    current_price,
    graduation_progress,
    invariant_drift,
    market_cap,
    quote_buy,
    quote_sell,
)
from blippmarket.errors import (
    DegenerateMarket,
    DegenerateQuote,
    InsufficientBalance,
    InsufficientLiquidity,
    InvalidAmount,
)
from blippmarket.models import MarketState


@pytest.fixture
def fresh_market():
    """Market as initialized: 30 virtual base, full 1B share supply."""
    return MarketState(base_reserve=30, share_reserve=1_000_000_000, total_issuance=1_000_000_000)


@pytest.fixture
def active_market(fresh_market):
    return apply_buy(fresh_market, quote_buy(fresh_market, 20))


def test_buy_worked_example(fresh_market):
    q = quote_buy(fresh_market, 1)
    assert fresh_market.k == 30_000_000_000
    assert q.new_base_reserve == 31
    assert abs(q.new_share_reserve - 967_741_935.48) < 0.01
    assert abs(q.shares_out - 32_258_064.52) < 0.01
    assert abs(q.price_per_share - 3.1e-8) < 1e-12
    assert current_price(fresh_market) == pytest.approx(3e-8)
    assert 3.0 < q.price_impact_pct < 3.5
    assert q.fee_amount == pytest.approx(0.01)


def test_fee_is_not_deducted(fresh_market):
    with_fee = quote_buy(fresh_market, 5, fee_rate=0.01)
    no_fee = quote_buy(fresh_market, 5, fee_rate=0.0)
    assert with_fee.shares_out == no_fee.shares_out
    assert no_fee.fee_amount == 0


@pytest.mark.parametrize("amount", [0, -1, float("nan")])
def test_buy_rejects_non_positive(fresh_market, amount):
    with pytest.raises(InvalidAmount):
        quote_buy(fresh_market, amount)


@pytest.mark.parametrize("amount", [0, -5])
def test_sell_rejects_non_positive(active_market, amount):
    with pytest.raises(InvalidAmount):
        quote_sell(active_market, amount)


def test_sell_zero_on_fresh_market_is_invalid_amount(fresh_market):
    with pytest.raises(InvalidAmount):
        quote_sell(fresh_market, 0)


def test_sell_more_than_circulating(active_market):
    with pytest.raises(InsufficientBalance) as exc:
        quote_sell(active_market, active_market.total_sold + 1)
    assert exc.value.available == pytest.approx(active_market.total_sold)


def test_buy_that_exhausts_pool_is_rejected():
    # Tiny pool: k / new_base underflows to 0 for a huge buy
    state = MarketState(base_reserve=1e-300, share_reserve=1e-10, total_issuance=1)
    with pytest.raises(InsufficientLiquidity):
        quote_buy(state, 1e300)


def test_dust_buy_is_degenerate(fresh_market):
    with pytest.raises(DegenerateQuote):
        quote_buy(fresh_market, 1e-20)


def test_empty_share_reserve_has_no_spot_price():
    state = MarketState(base_reserve=30, share_reserve=0, total_issuance=1_000)
    with pytest.raises(DegenerateMarket):
        current_price(state)
    assert current_price(MarketState(base_reserve=0, share_reserve=500, total_issuance=1_000)) == 0


@pytest.mark.parametrize(
    "base_reserve, share_reserve",
    [(0, 500), (30, 0)],
    ids=["empty-base", "empty-shares"],
)
@pytest.mark.parametrize("quote", [quote_buy, quote_sell], ids=["buy", "sell"])
def test_zero_reserve_quotes_lack_liquidity(quote, base_reserve, share_reserve):
    """k is 0, so the curve cannot pay out either side."""
    state = MarketState(base_reserve=base_reserve, share_reserve=share_reserve, total_issuance=1_000)
    with pytest.raises(InsufficientLiquidity):
        quote(state, 10)


@pytest.mark.parametrize("amount", [0.001, 1, 10, 69, 500, 10_000])
def test_buy_preserves_k(fresh_market, amount):
    q = quote_buy(fresh_market, amount)
    assert q.new_base_reserve * q.new_share_reserve == pytest.approx(fresh_market.k, rel=1e-12)
    assert invariant_drift(fresh_market, apply_buy(fresh_market, q)) < 1e-12


@pytest.mark.parametrize("fraction", [0.01, 0.25, 0.5, 1.0])
def test_sell_preserves_k(active_market, fraction):
    q = quote_sell(active_market, active_market.total_sold * fraction)
    assert q.new_base_reserve * q.new_share_reserve == pytest.approx(active_market.k, rel=1e-12)


def test_buy_monotonic(fresh_market):
    amounts = [0.1, 1, 5, 25, 100, 1_000]
    quotes = [quote_buy(fresh_market, a) for a in amounts]
    for smaller, larger in zip(quotes, quotes[1:]):
        assert larger.shares_out > smaller.shares_out
        assert larger.price_per_share >= smaller.price_per_share
        assert larger.price_impact_pct >= smaller.price_impact_pct


@pytest.mark.parametrize("amount", [0.5, 1, 30, 69, 250])
def test_buy_then_sell_never_profits(fresh_market, amount):
    buy = quote_buy(fresh_market, amount)
    after = apply_buy(fresh_market, buy)
    sell = quote_sell(after, buy.shares_out)
    assert sell.proceeds_out <= amount * (1 + 1e-12)
    assert sell.proceeds_out - sell.fee_amount < amount
    back = apply_sell(after, sell)
    assert back.share_reserve == pytest.approx(fresh_market.share_reserve)
    assert back.base_reserve == pytest.approx(fresh_market.base_reserve)


def test_sell_impact_is_negative(active_market):
    q = quote_sell(active_market, active_market.total_sold / 2)
    assert q.price_impact_pct < 0
    assert q.proceeds_out < active_market.base_reserve


def test_selling_all_circulating_returns_to_initial_base(fresh_market, active_market):
    q = quote_sell(active_market, active_market.total_sold)
    assert q.new_base_reserve == pytest.approx(fresh_market.base_reserve)
    back = apply_sell(active_market, q)
    assert back.share_reserve <= back.total_issuance


def test_apply_does_not_mutate(fresh_market):
    q = quote_buy(fresh_market, 3)
    after = apply_buy(fresh_market, q)
    assert fresh_market.base_reserve == 30
    assert after.base_reserve == 33
    assert after.total_issuance == fresh_market.total_issuance


def test_market_cap(fresh_market, active_market):
    assert market_cap(fresh_market) == 0
    expected = current_price(active_market) * active_market.total_sold
    assert market_cap(active_market) == pytest.approx(expected)


def test_graduation_progress():
    state = MarketState(base_reserve=30 + 34.5, share_reserve=5e8, total_issuance=1e9)
    assert graduation_progress(state, 30, 69) == pytest.approx(50.0)
    past = MarketState(base_reserve=30 + 138, share_reserve=1e8, total_issuance=1e9)
    assert graduation_progress(past, 30, 69) == pytest.approx(200.0)
    below = MarketState(base_reserve=10, share_reserve=1e9, total_issuance=1e9)
    assert graduation_progress(below, 30, 69) < 0
    with pytest.raises(InvalidAmount):
        graduation_progress(state, 30, 0)


def test_engine_binds_parameters(fresh_market):
    engine = BondingCurveEngine(fee_rate=0.02, virtual_base_offset=30, graduation_threshold=100)
    q = engine.quote_buy(fresh_market, 10)
    assert q.fee_amount == pytest.approx(0.2)
    state = apply_buy(fresh_market, q)
    assert engine.graduation_progress(state) == pytest.approx(10.0)
    assert math.isclose(engine.current_price(state), state.base_reserve / state.share_reserve)


def test_engine_rejects_bad_fee_rate():
    with pytest.raises(InvalidAmount):
        BondingCurveEngine(fee_rate=1.5)


@pytest.mark.parametrize("fee_rate", [-0.01, 1.0, float("nan")])
def test_quotes_reject_bad_fee_rate(active_market, fee_rate):
    with pytest.raises(InvalidAmount):
        quote_buy(active_market, 1, fee_rate=fee_rate)
    with pytest.raises(InvalidAmount):
        quote_sell(active_market, 1000, fee_rate=fee_rate)
