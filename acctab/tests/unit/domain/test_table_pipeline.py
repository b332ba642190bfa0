from __future__ import annotations

import itertools

import pytest

from acctab.domain.entities import FilterCriteria, PageState, SortDirection, SortSpec
from acctab.domain.table_pipeline import (
    TableState,
    filter_records,
    next_page_number,
    page_slice,
    partition_by_level,
    prev_page_number,
    recompute,
    sort_records,
    total_pages,
)
from acctab.tests.unit.fakes import record


def _ids(records):
    return [str(item.id) for item in records]


def _sample():
    return [
        record("001", "Acme Corp", phone="555-0101", owner="u1", level="Level 1"),
        record("002", "acme labs", phone="555-0202", owner="u2", level="Level 2"),
        record("003", "Blue Harbor", owner="u1", level="Level 1"),
        record("004", None, phone="555-0101", owner="u1", level="Level 2"),
        record("005", "Cobalt", phone="777-ACME", owner="u3", level="Level 3"),
    ]


def test_empty_criteria_is_identity() -> None:
    records = _sample()

    assert filter_records(records, FilterCriteria()) == records


def test_name_filter_is_case_insensitive_and_skips_missing_names() -> None:
    result = filter_records(_sample(), FilterCriteria(name="ACME"))

    assert _ids(result) == ["001", "002"]


def test_phone_filter_is_case_sensitive_and_skips_missing_phones() -> None:
    records = _sample()

    assert _ids(filter_records(records, FilterCriteria(phone="ACME"))) == ["005"]
    assert filter_records(records, FilterCriteria(phone="acme")) == []
    assert _ids(filter_records(records, FilterCriteria(phone="555-01"))) == ["001", "004"]


def test_owner_filter_requires_exact_match() -> None:
    records = _sample()

    assert _ids(filter_records(records, FilterCriteria(owner="u1"))) == ["001", "003", "004"]
    assert filter_records(records, FilterCriteria(owner="u")) == []


def test_filters_combine_as_conjunction() -> None:
    records = _sample()
    names = ["", "acme", "o"]
    phones = ["", "555", "0101"]
    owners = ["", "u1", "u2"]

    for name, phone, owner in itertools.product(names, phones, owners):
        criteria = FilterCriteria(name=name, phone=phone, owner=owner)
        expected = [
            item
            for item in records
            if (not name or (item.name and name.lower() in item.name.lower()))
            and (not phone or (item.phone and phone in item.phone))
            and (not owner or item.owner_id == owner)
        ]
        assert filter_records(records, criteria) == expected


def test_sort_is_case_insensitive_with_missing_values_first() -> None:
    result = sort_records(_sample(), SortSpec(field="Name"))

    assert _ids(result) == ["004", "001", "002", "003", "005"]


def test_sort_descending_reverses_order() -> None:
    result = sort_records(_sample(), SortSpec(field="Name", direction=SortDirection.DESC))

    assert _ids(result) == ["005", "003", "002", "001", "004"]


def test_sort_does_not_mutate_input_and_is_repeatable() -> None:
    records = _sample()
    before = list(records)
    spec = SortSpec(field="Phone")

    first = sort_records(records, spec)
    second = sort_records(first, spec)

    assert records == before
    assert first == second


@pytest.mark.parametrize("direction", [SortDirection.ASC, SortDirection.DESC])
def test_sort_with_equal_keys_keeps_input_order(direction: SortDirection) -> None:
    records = [record(f"00{idx}", "Same", level="Level 1") for idx in range(5)]

    result = sort_records(records, SortSpec(field="Name", direction=direction))

    assert result == records


def test_sort_by_nested_field_path() -> None:
    records = [
        record("001", "A", modified_by="zoe"),
        record("002", "B", modified_by="Adam"),
        record("003", "C"),
    ]

    result = sort_records(records, SortSpec(field="LastModifiedBy.Name"))

    assert _ids(result) == ["003", "002", "001"]


def test_partition_drops_unknown_levels() -> None:
    records = _sample()

    levels = partition_by_level(records)

    assert _ids(levels["Level 1"]) == ["001", "003"]
    assert _ids(levels["Level 2"]) == ["002", "004"]
    grouped = set(_ids(levels["Level 1"])) | set(_ids(levels["Level 2"]))
    assert grouped <= set(_ids(records))
    assert "005" not in grouped


def test_partition_covers_every_record_with_known_level() -> None:
    records = [item for item in _sample() if item.level in {"Level 1", "Level 2"}]

    levels = partition_by_level(records)

    assert sorted(_ids(levels["Level 1"]) + _ids(levels["Level 2"])) == sorted(_ids(records))


def test_partition_supports_custom_categories() -> None:
    levels = partition_by_level(_sample(), ("Level 3",))

    assert list(levels) == ["Level 3"]
    assert _ids(levels["Level 3"]) == ["005"]


def test_page_slice_bounds() -> None:
    records = [record(f"{idx:03d}", f"n{idx}") for idx in range(12)]

    assert _ids(page_slice(records, 1, 5)) == ["000", "001", "002", "003", "004"]
    assert _ids(page_slice(records, 3, 5)) == ["010", "011"]
    assert page_slice(records, 4, 5) == []
    for size in range(1, 14):
        pages = total_pages(records, size)
        assert pages * size >= len(records) > (pages - 1) * size
        for number in range(1, pages + 2):
            assert len(page_slice(records, number, size)) <= size


def test_page_slice_rejects_invalid_arguments() -> None:
    with pytest.raises(ValueError):
        page_slice([], 0, 5)
    with pytest.raises(ValueError):
        page_slice([], 1, 0)


def test_total_pages_of_empty_sequence_is_zero() -> None:
    assert total_pages([], 5) == 0


def test_next_page_stops_when_past_every_level() -> None:
    assert next_page_number(1, [3, 1]) == 2
    assert next_page_number(3, [3, 1]) == 3
    assert next_page_number(5, [3, 1]) == 5
    assert next_page_number(1, [0, 0]) == 1


def test_prev_page_stops_at_first_page() -> None:
    assert prev_page_number(1) == 1
    assert prev_page_number(4) == 3


def test_recompute_runs_filter_sort_partition_page() -> None:
    state = TableState(
        records=_sample(),
        criteria=FilterCriteria(owner="u1"),
        sort=SortSpec(field="Name", direction=SortDirection.DESC),
        page=PageState(page_number=1, page_size=1),
    )

    view = recompute(state)

    assert _ids(view.levels["Level 1"]) == ["003", "001"]
    assert _ids(view.levels["Level 2"]) == ["004"]
    assert _ids(view.pages["Level 1"]) == ["003"]
    assert view.total_pages == {"Level 1": 2, "Level 2": 1}
    assert view.filtered_count == 3
