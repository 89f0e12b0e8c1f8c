import logging
import random

import pytest

from transforms.big_mac.ratios import (
    deviations_for_partition,
    flatten,
    partition_by_date,
    reference_values,
)


def price(r):
    return r.dollar_price


class TestPartitioning:
    def test_groups_by_date_and_flattens_in_date_order(self, make_obs):
        items = [
            make_obs("USA", "USD", 5.0, date="2021-01-01"),
            make_obs("GBR", "GBP", 3.5, date="2020-01-01"),
            make_obs("JPN", "JPY", 390, date="2021-01-01"),
        ]
        partitions = partition_by_date(items, lambda o: o.date)
        assert [o.iso_a3 for o in partitions["2021-01-01"]] == ["USA", "JPN"]
        assert [o.iso_a3 for o in flatten(partitions)] == ["GBR", "USA", "JPN"]


class TestDeviations:
    def test_three_currency_scenario(self, make_obs):
        partition = [
            make_obs("USA", "USD", 5.00),
            make_obs("EUZ", "EUR", 4.00),
            make_obs("GBR", "GBP", 3.50),
        ]
        usa, euz, gbr = deviations_for_partition(partition, price, ["USD", "EUR"])

        assert usa["USD"] == 0.0
        assert euz["USD"] == pytest.approx(-0.200)
        assert gbr["USD"] == pytest.approx(-0.300)
        assert euz["EUR"] == 0.0
        assert usa["EUR"] == pytest.approx(0.25)
        assert gbr["EUR"] == pytest.approx(-0.125)

    def test_reference_currency_is_at_parity(self, make_obs):
        partition = [make_obs(iso, cur, p) for iso, cur, p in
                     [("USA", "USD", 5.67), ("JPN", "JPY", 3.55), ("CHN", "CNY", 3.12)]]
        basket = ["USD", "JPY", "CNY"]
        for obs, devs in zip(partition, deviations_for_partition(partition, price, basket)):
            assert devs[obs.currency_code] == 0.0

    def test_missing_reference_only_affects_that_currency(self, make_obs):
        partition = [make_obs("USA", "USD", 5.0), make_obs("GBR", "GBP", 4.0)]
        devs = deviations_for_partition(partition, price, ["USD", "GBP", "JPY"])
        assert all(d["JPY"] is None for d in devs)
        assert devs[1]["USD"] == pytest.approx(-0.2)
        assert devs[0]["GBP"] == pytest.approx(0.25)

    def test_ambiguous_reference_is_missing(self, make_obs):
        partition = [
            make_obs("EUZ", "EUR", 4.0),
            make_obs("DEU", "EUR", 4.1),
            make_obs("USA", "USD", 5.0),
        ]
        refs = reference_values(partition, price, ["EUR", "USD"])
        assert refs == {"EUR": None, "USD": 5.0}

    def test_record_without_price_has_missing_deviations(self, make_obs):
        partition = [make_obs("USA", "USD", 5.0), make_obs("ARG", "ARS", None)]
        devs = deviations_for_partition(partition, price, ["USD"])
        assert devs[1] == {"USD": None}

    def test_order_independent(self, make_obs):
        partition = [
            make_obs("USA", "USD", 5.67), make_obs("EUZ", "EUR", 4.68),
            make_obs("GBR", "GBP", 4.40), make_obs("JPN", "JPY", 3.55),
            make_obs("CHN", "CNY", 3.12), make_obs("MEX", "MXN", 2.66),
        ]
        basket = ["USD", "EUR", "GBP", "JPY", "CNY"]
        expected = {o.iso_a3: d for o, d in zip(partition, deviations_for_partition(partition, price, basket))}

        shuffled = partition[:]
        random.Random(7).shuffle(shuffled)
        actual = {o.iso_a3: d for o, d in zip(shuffled, deviations_for_partition(shuffled, price, basket))}
        assert actual == expected

    def test_basket_order_does_not_matter(self, make_obs):
        partition = [make_obs("USA", "USD", 5.0), make_obs("EUZ", "EUR", 4.0), make_obs("GBR", "GBP", 3.5)]
        forward = deviations_for_partition(partition, price, ["USD", "EUR", "GBP"])
        backward = deviations_for_partition(partition, price, ["GBP", "EUR", "USD"])
        assert forward == backward

    def test_shared_reference_currency_is_warned(self, make_obs, caplog):
        partition = [make_obs("EUZ", "EUR", 4.7), make_obs("HRV", "EUR", 4.1), make_obs("USA", "USD", 5.7)]
        with caplog.at_level(logging.WARNING):
            devs = deviations_for_partition(partition, price, ["USD", "EUR"], date="2023-07-01")
        assert all(d["EUR"] is None for d in devs)
        assert "2 records share base currency EUR on 2023-07-01" in caplog.text

    def test_absent_reference_currency_is_not_warned(self, make_obs, caplog):
        partition = [make_obs("USA", "USD", 5.7)]
        with caplog.at_level(logging.WARNING):
            deviations_for_partition(partition, price, ["USD", "JPY"], date="2023-07-01")
        assert caplog.text == ""
