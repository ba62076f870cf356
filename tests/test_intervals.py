from datetime import timedelta

import pytest
from pytz import UnknownTimeZoneError

from conftest import at
from panchangclock.intervals import parse_almanac, parse_intervals, parse_line
from panchangclock.models import PERIODIC_CATEGORIES, Category, CivilTime

TITHI_LINES = (
    "Prathama: 2025/12/04 15:14 to 2025/12/05 11:26",
    "Vidhiya: 2025/12/05 11:26 to 2025/12/06 08:02",
)


def test_wall_clock_is_read_in_reference_zone():
    first, second = parse_intervals(TITHI_LINES, "Asia/Kolkata")
    assert first.name == "Prathama"
    assert first.start == at("2025/12/04 09:44")
    assert first.end == at("2025/12/05 05:56")
    assert second.start == first.end


def test_seconds_suffix_is_discarded():
    interval = parse_line("Bava: 2025/12/04 01:44:59 to 2025/12/04 13:50:00", "UTC")
    assert interval.start == at("2025/12/04 01:44")
    assert interval.end == at("2025/12/04 13:50")


def test_name_keeps_slashes_and_spaces():
    interval = parse_line(
        "  Aswini / Bharani : 2025/12/04 01:44 to 2025/12/04 13:50  ", "UTC"
    )
    assert interval.name == "Aswini / Bharani"


def test_dash_dates_and_single_digit_fields():
    interval = parse_line("Siva: 2025-12-4 9:05 to 2025-12-04 18:30", "UTC")
    assert interval.start == at("2025/12/04 09:05")


@pytest.mark.parametrize(
    "line",
    [
        "",
        "   ",
        "==========",
        "Next Thithi: Panchami 2025/12/08 03:13 to 2025/12/09 01:00",
        "Sunrise: 06:21",
        "Prathama: 2025/12/04 15:14",
        "Prathama 2025/12/04 15:14 to 2025/12/05 11:26",
        "Prathama: 2025/13/04 15:14 to 2025/12/05 11:26",
        "Prathama: 2025/12/04 25:14 to 2025/12/05 11:26",
        "Prathama: 2025/12/05 11:26 to 2025/12/04 15:14",
        "Prathama: 2025/12/05 11:26 to 2025/12/05 11:26",
        "Bava: 0001/01/01 00:00 to 0001/01/01 06:00",
    ],
)
def test_non_records_are_dropped(line):
    assert parse_line(line, "Asia/Kolkata") is None


def test_out_of_range_year_is_dropped():
    line = "Bava: 9999/12/31 23:00 to 9999/12/31 23:30"
    assert parse_line(line, "America/Los_Angeles") is None


def test_malformed_lines_do_not_abort_section():
    lines = (TITHI_LINES[0], "garbage: not a record", TITHI_LINES[1])
    names = [i.name for i in parse_intervals(lines, "Asia/Kolkata")]
    assert names == ["Prathama", "Vidhiya"]


def test_textual_order_is_preserved():
    lines = tuple(reversed(TITHI_LINES))
    names = [i.name for i in parse_intervals(lines, "Asia/Kolkata")]
    assert names == ["Vidhiya", "Prathama"]


def test_conversion_follows_dst_change():
    # New York leaves daylight time on 2025-11-02: this day is 25 hours long
    (interval,) = parse_intervals(
        ["Day: 2025/11/01 12:00 to 2025/11/02 12:00"], "America/New_York"
    )
    assert interval.start == at("2025/11/01 16:00")
    assert interval.end == at("2025/11/02 17:00")
    assert interval.duration == timedelta(hours=25)


def test_ambiguous_reading_takes_standard_time():
    instant = CivilTime(2025, 11, 2, 1, 30, "America/New_York").to_instant()
    assert instant == at("2025/11/02 06:30")


def test_unknown_zone_raises():
    with pytest.raises(UnknownTimeZoneError):
        parse_intervals(TITHI_LINES, "Mars/Olympus_Mons")


def test_category_families():
    assert [c for c in Category if c.is_periodic] == list(PERIODIC_CATEGORIES)
    assert Category.NAKSHATRA.labels == ("Nakshatram", "Nakshatra")


def test_empty_section_parses_to_empty():
    assert parse_intervals((), "Asia/Kolkata") == ()


def test_parsing_is_idempotent(chennai_text):
    assert parse_almanac(chennai_text, "Asia/Kolkata") == parse_almanac(
        chennai_text, "Asia/Kolkata"
    )


def test_chennai_file_counts(chennai_text):
    almanac = parse_almanac(chennai_text, "Asia/Kolkata")
    counts = {c: len(v) for c, v in almanac.items()}
    assert counts == {
        Category.TITHI: 5,
        Category.NAKSHATRA: 4,
        Category.YOGAM: 4,
        Category.KARANAM: 5,
        Category.RAHUKALA: 4,
        Category.YAMAGANDA: 4,
        Category.DURMUHURTHA: 6,
        Category.VARJYAM: 3,
    }


@pytest.mark.parametrize(
    "file_name, zone",
    [
        ("panchangam_Chennai.txt", "Asia/Kolkata"),
        ("panchangam_Portland.txt", "America/Los_Angeles"),
        ("panchangam_Boston.txt", "America/New_York"),
    ],
)
def test_periodic_sequences_are_ordered_and_contiguous(resources_dir, file_name, zone):
    text = (resources_dir / file_name).read_text(encoding="utf-8")
    almanac = parse_almanac(text, zone)
    for category in PERIODIC_CATEGORIES:
        intervals = almanac[category]
        assert intervals
        for interval in intervals:
            assert interval.start < interval.end
        for earlier, later in zip(intervals, intervals[1:]):
            assert earlier.end <= later.start


def test_same_instants_across_city_files(resources_dir):
    def tithi(file_name, zone):
        text = (resources_dir / file_name).read_text(encoding="utf-8")
        return parse_almanac(text, zone)[Category.TITHI]

    chennai = tithi("panchangam_Chennai.txt", "Asia/Kolkata")
    portland = tithi("panchangam_Portland.txt", "America/Los_Angeles")
    boston = tithi("panchangam_Boston.txt", "America/New_York")
    assert chennai == portland == boston


def test_boston_variants_and_missing_section(resources_dir):
    text = (resources_dir / "panchangam_Boston.txt").read_text(encoding="utf-8")
    almanac = parse_almanac(text, "America/New_York")
    assert len(almanac[Category.NAKSHATRA]) == 4
    assert len(almanac[Category.RAHUKALA]) == 3
    assert almanac[Category.VARJYAM] == ()
