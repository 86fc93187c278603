import pytest

from brandpipe.normalizers import BrandNormalizer, RecordingReporter, parse_int, to_int
from brandpipe.validation import validate_brand


# --- leading-integer parsing ---

@pytest.mark.parametrize("s, expected", [
    ("1987", 1987),
    ("1987abc", 1987),
    ("  42 stores", 42),
    ("+7", 7),
    ("-12", -12),
    ("\t\n 5", 5),
    ("abc", None),
    ("", None),
    ("   ", None),
    ("-", None),
    ("x12", None),
    ("3.9", 3),
    ("0001987", 1987),
    ("\ufeff42", 42),
    ("\u00a0\u3000 7", 7),
    ("\x1c42", None),
    ("\x1f42", None),
    ("9" * 19, None),
])
def test_parse_int(s, expected):
    assert parse_int(s) == expected


def test_parse_int_huge_digit_run_does_not_raise():
    assert parse_int("9" * 5000) is None
    assert parse_int(" -" + "9" * 5000) is None
    assert parse_int("0" * 5000 + "1987") == 1987


def test_to_int_rejects_bools_and_fractions():
    assert to_int(True) is None
    assert to_int(12.5) is None
    assert to_int(float("nan")) is None
    assert to_int(12.0) == 12
    assert to_int(None) is None
    assert to_int({"n": 1}) is None


def test_empty_recording_reporter_is_kept():
    reporter = RecordingReporter()
    n = BrandNormalizer(reporter=reporter, current_year=2024)
    assert n.reporter is reporter

    n.transform({"_id": "e1"})
    assert [e[1] for e in reporter.events] == [
        "brandName", "yearFounded", "headquarters", "numberOfLocations",
    ]

def test_empty_per_call_reporter_is_used(normalizer, reporter):
    per_call = RecordingReporter()
    normalizer.transform({"_id": "e2"}, reporter=per_call)
    assert len(per_call.events) == 4
    assert reporter.events == []


# --- brandName ---

def test_brand_name_trimmed(normalizer, reporter):
    assert normalizer.extract_brand_name({"brandName": "  Acme  "}) == "Acme"
    assert len(reporter.events) == 0

def test_brand_name_nested_fallback(normalizer):
    assert normalizer.extract_brand_name({"brand": {"name": "Acme"}}) == "Acme"

def test_brand_name_blank_top_level_uses_nested(normalizer):
    assert normalizer.extract_brand_name({"brandName": "   ", "brand": {"name": " Acme "}}) == "Acme"

def test_brand_name_fallback_reported(normalizer, reporter):
    out = normalizer.extract_brand_name({"_id": "x1", "brandName": 42, "brand": {"name": "  "}})
    assert out == "Unknown Brand"
    assert reporter.events == [("x1", "brandName", "Unknown Brand")]


# --- yearFounded ---

def test_year_first_field_wins(normalizer):
    assert normalizer.extract_year_founded({"yearFounded": 1700, "yearCreated": 1800}) == 1700

def test_year_skips_invalid_candidates(normalizer):
    rec = {"yearFounded": "", "yearCreated": None, "yearsFounded": "1901 (approx)"}
    assert normalizer.extract_year_founded(rec) == 1901

def test_year_out_of_range_moves_to_next_field(normalizer):
    assert normalizer.extract_year_founded({"yearFounded": 1500, "yearCreated": "1899"}) == 1899

@pytest.mark.parametrize("value", [1500, 2029, "1599", "2025", "abc", True])
def test_year_out_of_range_falls_back(normalizer, reporter, value):
    assert normalizer.extract_year_founded({"_id": 7, "yearFounded": value}) == 1600
    assert reporter.events == [(7, "yearFounded", 1600)]

def test_year_bounds_inclusive(normalizer, reporter):
    assert normalizer.extract_year_founded({"yearFounded": 1600}) == 1600
    assert normalizer.extract_year_founded({"yearFounded": "2024"}) == 2024
    assert len(reporter.events) == 0

def test_year_defaults_to_today():
    from brandpipe.normalizers import current_year
    n = BrandNormalizer(reporter=RecordingReporter())
    assert n.extract_year_founded({"yearFounded": current_year()}) == current_year()
    assert n.extract_year_founded({"yearFounded": current_year() + 5}) == 1600


# --- headquarters ---

def test_headquarters_prefers_headquarters(normalizer):
    assert normalizer.extract_headquarters({"headquarters": " Paris ", "hqAddress": "Lyon"}) == "Paris"

def test_headquarters_uses_hq_address(normalizer):
    assert normalizer.extract_headquarters({"headquarters": "", "hqAddress": " Lyon"}) == "Lyon"

def test_headquarters_fallback(normalizer, reporter):
    assert normalizer.extract_headquarters({"hqAddress": 12}) == "Unknown Location"
    assert reporter.events[0][1] == "headquarters"


# --- numberOfLocations ---

@pytest.mark.parametrize("value, expected", [
    (42, 42),
    ("42 stores", 42),
    (3.0, 3),
    ("abc", 1),
    (0, 1),
    ("-4", 1),
    (2.5, 1),
    (None, 1),
])
def test_number_of_locations(normalizer, value, expected):
    assert normalizer.extract_number_of_locations({"numberOfLocations": value}) == expected

def test_number_of_locations_ignores_alternate_names(normalizer, reporter):
    # only numberOfLocations is consulted
    assert normalizer.extract_number_of_locations({"locations": 50, "numberOfStores": 9}) == 1
    assert len(reporter.events) == 1


# --- whole record ---

MESSY = [
    {},
    {"brandName": None, "yearFounded": None, "headquarters": None, "numberOfLocations": None},
    {"brandName": ["x"], "yearFounded": {"y": 1}, "headquarters": 5, "numberOfLocations": []},
    {"brand": "Acme", "yearCreated": "-1900", "hqAddress": "\n", "numberOfLocations": "0x10"},
    {"brand": {"name": None}, "yearsFounded": float("inf"), "numberOfLocations": float("nan")},
    {"brandName": "Ok", "yearFounded": 1999.5, "headquarters": "Rome", "numberOfLocations": "  9"},
    {"brandName": "Big", "yearFounded": "9" * 5000, "numberOfLocations": "9" * 5000},
]

@pytest.mark.parametrize("raw", MESSY)
def test_transform_always_canonical(normalizer, raw):
    out = normalizer.transform(raw)
    assert set(out) == {"brandName", "yearFounded", "headquarters", "numberOfLocations"}
    assert validate_brand(out, max_year=2024) == []
    assert out["brandName"] == out["brandName"].strip()
    assert out["headquarters"] == out["headquarters"].strip()

def test_transform_huge_digit_strings_fall_back(normalizer, reporter):
    out = normalizer.transform({"_id": "h1", "brandName": "Big", "headquarters": "Oslo",
                                "yearFounded": "9" * 5000, "numberOfLocations": "9" * 5000})
    assert out["yearFounded"] == 1600
    assert out["numberOfLocations"] == 1
    assert [e[1] for e in reporter.events] == ["yearFounded", "numberOfLocations"]

def test_transform_does_not_mutate_input(normalizer):
    raw = {"brand": {"name": " Acme "}, "yearCreated": "1950"}
    snapshot = {"brand": {"name": " Acme "}, "yearCreated": "1950"}
    normalizer.transform(raw)
    assert raw == snapshot

def test_transform_idempotent(normalizer):
    raw = {"brand": {"name": "Acme"}, "yearsFounded": "1911 est.", "hqAddress": "Oslo", "numberOfLocations": "7"}
    once = normalizer.transform(raw)
    twice = normalizer.transform(once)
    assert twice == once
    assert twice["yearFounded"] == 1911


# --- discard set ---

def test_fields_to_discard(normalizer):
    raw = {"_id": "a", "legacyField": 1, "brandName": "X", "yearCreated": 1900,
           "hqAddress": "Y", "createdAt": "t", "updatedAt": "t", "__v": 0}
    assert normalizer.fields_to_discard(raw) == {"legacyField", "yearCreated", "hqAddress"}

def test_fields_to_discard_clean_record(normalizer):
    raw = {"_id": "a", "brandName": "X", "yearFounded": 1900, "headquarters": "Y", "numberOfLocations": 2}
    assert normalizer.fields_to_discard(raw) == set()
