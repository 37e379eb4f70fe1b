"""
Query engine: county-scoped listings, distinct initials and initial filtering.
"""

from __future__ import annotations

import unicodedata

import pytest

from gazetteer.core.errors import NotFound, ValidationFailed
from gazetteer.modules.places import service
from gazetteer.modules.places.service import normalize_letter, place_initial


@pytest.fixture
def fejer(make_county, make_place):
    county = make_county("Fejér")
    make_place(county, "Bicske", "2060")
    make_place(county, "Abasár", "3261")
    make_place(county, "Aba", "8127")
    return county


class TestPlaceInitial:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Aba", "A"),
            ("aba", "A"),
            ("Ábrahámhegy", "Á"),
            ("őrbottyán", "Ő"),
            ("  szentendre", "S"),
            ("ßtraße", "ß"),
            ("ﬁlm", "ﬁ"),
            ("", ""),
        ],
    )
    def test_uppercases_first_character(self, name: str, expected: str) -> None:
        assert place_initial(name) == expected

    def test_decomposed_accents_are_composed_first(self) -> None:
        decomposed = unicodedata.normalize("NFD", "Ábrahámhegy")
        assert place_initial(decomposed) == "Á"

    def test_letter_must_be_one_character(self) -> None:
        assert normalize_letter("a") == "A"
        assert normalize_letter("á") == "Á"
        assert normalize_letter("ß") == "ß"
        with pytest.raises(ValidationFailed) as exc:
            normalize_letter("ab")
        assert list(exc.value.errors) == ["letter"]


class TestInitialsForCounty:
    def test_distinct_sorted_uppercase(self, db, fejer) -> None:
        assert service.initials_for_county(db, fejer.id) == ["A", "B"]

    def test_case_is_folded_before_dedup(self, db, fejer, make_place) -> None:
        make_place(fejer, "aba-puszta", "8127")
        make_place(fejer, "bicskei tanya", "2060")

        assert service.initials_for_county(db, fejer.id) == ["A", "B"]

    def test_accented_initials_sort_after_ascii(self, db, fejer, make_place) -> None:
        make_place(fejer, "Ábrahámhegy", "8254")
        make_place(fejer, "Zámoly", "8081")

        assert service.initials_for_county(db, fejer.id) == ["A", "B", "Z", "Á"]

    def test_only_counts_places_of_that_county(self, db, fejer, make_county, make_place) -> None:
        heves = make_county("Heves")
        make_place(heves, "Eger", "3300")

        assert service.initials_for_county(db, fejer.id) == ["A", "B"]
        assert service.initials_for_county(db, heves.id) == ["E"]

    def test_empty_county_has_no_initials(self, db, make_county) -> None:
        empty = make_county("Üres")
        assert service.initials_for_county(db, empty.id) == []

    def test_unknown_county_is_not_found(self, db) -> None:
        with pytest.raises(NotFound):
            service.initials_for_county(db, 999)


class TestPlacesByInitial:
    def test_filters_and_orders_by_name(self, db, fejer) -> None:
        places = service.places_by_initial(db, fejer.id, "A")
        assert [p.name for p in places] == ["Aba", "Abasár"]

    def test_letter_is_case_insensitive(self, db, fejer, make_place) -> None:
        make_place(fejer, "alsószentiván", "7012")

        names = [p.name for p in service.places_by_initial(db, fejer.id, "a")]

        # code point order: uppercase before lowercase
        assert names == ["Aba", "Abasár", "alsószentiván"]

    def test_accented_letter_does_not_match_plain_letter(self, db, fejer, make_place) -> None:
        make_place(fejer, "Ábrahámhegy", "8254")

        assert [p.name for p in service.places_by_initial(db, fejer.id, "Á")] == ["Ábrahámhegy"]
        assert "Ábrahámhegy" not in [p.name for p in service.places_by_initial(db, fejer.id, "A")]

    def test_same_name_is_ordered_by_id(self, db, fejer, make_place) -> None:
        second = make_place(fejer, "Aba", "8128")

        places = service.places_by_initial(db, fejer.id, "A")

        assert [p.name for p in places] == ["Aba", "Aba", "Abasár"]
        assert places[1].id == second.id

    def test_no_match_is_an_empty_list(self, db, fejer) -> None:
        assert service.places_by_initial(db, fejer.id, "Q") == []

    def test_unknown_county_is_not_found(self, db) -> None:
        with pytest.raises(NotFound):
            service.places_by_initial(db, 999, "A")


class TestPlacesForCounty:
    def test_returns_places_in_store_order(self, db, fejer) -> None:
        places = service.list_places_for_county(db, fejer.id)
        assert [p.name for p in places] == ["Bicske", "Abasár", "Aba"]

    def test_empty_county_returns_empty_list(self, db, make_county) -> None:
        county = make_county("Üres")
        assert service.list_places_for_county(db, county.id) == []

    def test_unknown_county_is_not_found(self, db) -> None:
        with pytest.raises(NotFound):
            service.list_places_for_county(db, 42)


def test_every_initial_selects_its_places(db, make_county, make_place) -> None:
    county = make_county("Vegyes")
    for name in ("ßtraße", "ﬁlm", "Ócsa", "aba", "Zámoly"):
        make_place(county, name)

    initials = service.initials_for_county(db, county.id)

    assert initials == sorted(initials)
    assert all(len(initial) == 1 for initial in initials)
    found = [p.name for initial in initials for p in service.places_by_initial(db, county.id, initial)]
    assert sorted(found) == sorted(["ßtraße", "ﬁlm", "Ócsa", "aba", "Zámoly"])
