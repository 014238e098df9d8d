import pytest
from bson import ObjectId

from films.errors import InvalidId, InvalidType, MissingParameter, SchemaViolation
from films.validation import parse_create_params, parse_film_id, validate_put_body


@pytest.mark.parametrize("raw,expected", [
    ("2014", 2014),
    (" 2014 ", 2014),
    ("2014.0", 2014),
    ("9223372036854775807", 2 ** 63 - 1),
])
def test_year_accepts_whole_numbers(raw, expected):
    film = parse_create_params("TEST", raw, "")

    assert film.year == expected


@pytest.mark.parametrize("raw", ["twothousand", "", "nan", "inf", "2014.5", "9223372036854775808", "1e30"])
def test_year_rejects_invalid_values(raw):
    with pytest.raises(InvalidType) as exc:
        parse_create_params("TEST", raw, "")

    assert exc.value.status_code == 400


def test_actors_are_trimmed_and_blank_entries_dropped():
    film = parse_create_params("TEST", "2014", " Oscar Isaac , ,\x02Alicia Vikander,")

    assert film.actors == ["Oscar Isaac", "Alicia Vikander"]


def test_blank_title_counts_as_missing():
    with pytest.raises(MissingParameter) as exc:
        parse_create_params("   ", "2014", "a")

    assert exc.value.detail["missing"] == ["title"]


def test_parse_film_id_round_trips_object_id():
    object_id = ObjectId()

    assert parse_film_id(str(object_id)) == object_id


@pytest.mark.parametrize("raw", ["foo", "", "0" * 23, "z" * 24])
def test_parse_film_id_rejects_malformed_ids(raw):
    with pytest.raises(InvalidId):
        parse_film_id(raw)


def test_put_body_reports_missing_and_unexpected_fields():
    film_id = str(ObjectId())

    with pytest.raises(SchemaViolation) as exc:
        validate_put_body(film_id, {"_id": film_id, "title": "T", "actors": [], "extra": 1})

    assert exc.value.status_code == 422
    assert exc.value.detail["missing"] == ["year"]
    assert exc.value.detail["unexpected"] == ["extra"]


def test_put_body_normalizes_integral_float_year():
    film_id = str(ObjectId())

    film = validate_put_body(film_id, {"_id": film_id, "title": "T", "year": 2015.0, "actors": []})

    assert film.year == 2015
    assert isinstance(film.year, int)


@pytest.mark.parametrize("year", [2 ** 63, -(2 ** 63) - 1, 1e19])
def test_put_body_rejects_year_outside_int64(year):
    film_id = str(ObjectId())

    with pytest.raises(SchemaViolation):
        validate_put_body(film_id, {"_id": film_id, "title": "T", "year": year, "actors": []})


def test_put_body_accepts_int64_bounds():
    film_id = str(ObjectId())

    film = validate_put_body(film_id, {"_id": film_id, "title": "T", "year": 2 ** 63 - 1, "actors": []})

    assert film.year == 2 ** 63 - 1
