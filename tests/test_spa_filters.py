"""
Tests for listing filters, lenient number parsing and facet derivation.
"""

import pytest

from app.services import spa_filters as filters
from conftest import build_spa


@pytest.mark.parametrize("raw, expected", [
    ("2", 2),
    (" 3 ", 3),
    ("2.0", 2),
    ("4.5", 4.5),
    (1, 1),
    (2.5, 2.5),
    (10**400, 10**400),
    ("1e400", None),
    ("", None),
    ("   ", None),
    ("abc", None),
    ("nan", None),
    ("inf", None),
    (None, None),
    (True, None),
])
def test_parse_number(raw, expected):
    assert filters.parse_number(raw) == expected


def test_location_filter_is_case_insensitive_exact(three_spas):
    result = filters.filter_spas(three_spas, location="uBUD")

    assert [s.id for s in result] == [1, 3]
    assert filters.filter_spas(three_spas, location="Ub") == []


def test_treatment_filter_matches_any_element(three_spas):
    result = filters.filter_spas(three_spas, treatment="massage")

    assert [s.id for s in result] == [1, 2]
    assert [s.id for s in filters.filter_spas(three_spas, treatment="FACIAL")] == [2]


def test_budget_filter_exact_numeric_match(three_spas):
    assert [s.id for s in filters.filter_spas(three_spas, budget="2")] == [1]
    assert [s.id for s in filters.filter_spas(three_spas, budget=1)] == [3]
    assert filters.filter_spas(three_spas, budget="3") == []


def test_budget_filter_never_matches_absent_budget(three_spas):
    # spa 2 has no budget; it must not match budget 0
    assert filters.filter_spas(three_spas, budget="0") == []


def test_unparseable_budget_is_ignored(three_spas):
    result = filters.filter_spas(three_spas, budget="cheap")

    assert result == three_spas


def test_search_matches_title_or_address():
    spas = [
        build_spa(1, title="Lotus Retreat", address="Jl. Raya Ubud"),
        build_spa(2, title="Ocean Spa", address="Jl. Lotus No. 3"),
        build_spa(3, title="Bamboo", address="Jl. Kayu Aya"),
    ]

    assert [s.id for s in filters.filter_spas(spas, search="LOTUS")] == [1, 2]
    assert [s.id for s in filters.filter_spas(spas, search="raya ubud")] == [1]


def test_filters_are_and_combined(three_spas):
    result = filters.filter_spas(three_spas, location="ubud", treatment="massage")

    assert [s.id for s in result] == [1]


def test_empty_filter_values_have_no_effect(three_spas):
    result = filters.filter_spas(three_spas, location="", treatment="", budget="", search="")

    assert result == three_spas


def test_filtering_does_not_mutate_input(three_spas):
    before = list(three_spas)

    filters.filter_spas(three_spas, location="Seminyak")

    assert three_spas == before


def test_derive_facets_sorted_and_deduplicated():
    spas = [
        build_spa(1, location="Ubud", budget=3, treatments=("Massage", "Facial")),
        build_spa(2, location="Canggu", budget=1, treatments=("Massage", "Body Scrub")),
        build_spa(3, location="Ubud", budget=3, treatments=("facial",)),
    ]

    facets = filters.derive_facets(spas)

    assert facets.locations == ("Canggu", "Ubud")
    assert facets.treatments == ("Body Scrub", "Facial", "Massage", "facial")
    assert facets.budgets == (1, 3)


def test_derive_facets_skips_absent_values():
    spas = [
        build_spa(1, location="", budget=None),
        build_spa(2, location="Kuta", budget=10),
        build_spa(3, location="Sanur", budget=2),
    ]

    facets = filters.derive_facets(spas)

    assert facets.locations == ("Kuta", "Sanur")
    assert facets.budgets == (2, 10)
    assert facets.treatments == ()


def test_facet_treatments_match_catalog_treatments(three_spas):
    facets = filters.derive_facets(three_spas)
    catalog_treatments = {t for spa in three_spas for t in spa.treatments}

    assert set(facets.treatments) == catalog_treatments


def test_derive_facets_empty_catalog():
    assert filters.derive_facets([]).to_dict() == {
        "locations": [],
        "treatments": [],
        "budgets": [],
    }
