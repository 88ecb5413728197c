import pytest

from irisgov.coins import Coin, Coins, parse_coins
from irisgov.errors import InvalidAmount


def test_parse_single_coin() -> None:
    coins = parse_coins("100uiris")
    assert coins == Coins([Coin(denom="uiris", amount=100)])
    assert coins.to_list() == [{"denom": "uiris", "amount": "100"}]


def test_parse_multiple_coins_sorted_by_denom() -> None:
    coins = parse_coins("5uiris, 10iris-atto")
    assert [coin.denom for coin in coins] == ["iris-atto", "uiris"]
    assert str(coins) == "10iris-atto,5uiris"
    assert [coin.amount for coin in coins] == [10, 5]


def test_parse_empty_string_yields_no_coins() -> None:
    assert not parse_coins("")
    assert len(parse_coins("  ")) == 0


@pytest.mark.parametrize("raw", ["abc", "100", "-5uiris", "1.5iris", "100UIRIS", "10iris,"])
def test_parse_rejects_malformed_amounts(raw: str) -> None:
    with pytest.raises(InvalidAmount):
        parse_coins(raw)


def test_parse_rejects_duplicate_denominations() -> None:
    with pytest.raises(InvalidAmount, match="duplicate"):
        parse_coins("1uiris,2uiris")


def test_large_amounts_keep_precision() -> None:
    coins = parse_coins("10000000000000000000iris-atto")
    assert coins.to_list()[0]["amount"] == "10000000000000000000"
