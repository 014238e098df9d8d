from sqlmodel import SQLModel, Field


class FilmBase(SQLModel):
    title: str
    year: int
    actors: list[str] = Field(default_factory=list)


class Film(FilmBase):
    id: str = Field(alias="_id")

    @classmethod
    def from_document(cls, document: dict) -> "Film":
        """Build the wire representation of a stored film.

        Only ``_id``, ``title``, ``year`` and ``actors`` survive; the ObjectId
        is rendered as its hex string.
        """
        return cls.model_validate({**document, "_id": str(document["_id"])})
