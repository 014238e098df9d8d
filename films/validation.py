"""Request parsing for the films routes.

Every check here runs before a database connection is opened, so a
rejected request never reaches the store.
"""
import math
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId as InvalidObjectId

from films.errors import InvalidId, InvalidType, MissingParameter, SchemaViolation
from films.models.films import FilmBase

PUT_FIELDS = {"_id", "title", "year", "actors"}

# BSON stores integers as at most signed 64-bit
INT64_MIN, INT64_MAX = -(2 ** 63), 2 ** 63 - 1


def parse_film_id(film_id: str) -> ObjectId:
    try:
        return ObjectId(film_id)
    except (InvalidObjectId, TypeError):
        raise InvalidId(film_id) from None


def _parse_year(raw: str) -> int:
    try:
        year = int(raw)
    except ValueError:
        try:
            year = float(raw)
        except ValueError:
            raise InvalidType(f"year must be a number, got '{raw}'")
        if not math.isfinite(year) or not year.is_integer():
            raise InvalidType(f"year must be a whole number, got '{raw}'")
    if not INT64_MIN <= year <= INT64_MAX:
        raise InvalidType(f"year is out of range, got '{raw}'")
    return int(year)


def _parse_actors(raw: str) -> list[str]:
    actors = []
    for entry in raw.split(","):
        name = "".join(ch for ch in entry if ch.isprintable()).strip()
        if name:
            actors.append(name)
    return actors


def parse_create_params(title: str | None, year: str | None, actors: str | None) -> FilmBase:
    params = {"title": title, "year": year, "actors": actors}
    missing = sorted(
        key for key, value in params.items()
        if value is None or (key == "title" and not value.strip())
    )
    if missing:
        raise MissingParameter(missing)

    return FilmBase(title=title, year=_parse_year(year), actors=_parse_actors(actors))


def _is_number(value: Any) -> bool:
    # bool is an int subclass but not a JSON number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_put_body(film_id: str, body: Any) -> FilmBase:
    if not isinstance(body, dict):
        raise SchemaViolation("Body must be a JSON object")

    fields = set(body)
    if fields != PUT_FIELDS:
        unexpected = sorted(fields - PUT_FIELDS)
        missing = sorted(PUT_FIELDS - fields)
        raise SchemaViolation(
            f"Body fields must be exactly {sorted(PUT_FIELDS)}",
            missing=missing,
            unexpected=unexpected,
        )

    if body["_id"] != film_id:
        raise SchemaViolation("Body _id does not match the film id in the path")

    title, year, actors = body["title"], body["year"], body["actors"]
    if not isinstance(title, str) or not title.strip():
        raise SchemaViolation("title must be a non-empty string")
    if not _is_number(year) or (isinstance(year, float) and not year.is_integer()):
        raise SchemaViolation("year must be a whole number")
    if not INT64_MIN <= year <= INT64_MAX:
        raise SchemaViolation("year is out of range")
    if not isinstance(actors, list) or not all(isinstance(actor, str) for actor in actors):
        raise SchemaViolation("actors must be a list of strings")

    return FilmBase(title=title, year=int(year), actors=actors)
