from fastapi import FastAPI, Depends, Request, Response, status
from fastapi.responses import PlainTextResponse
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError
from films.models.films import Film
from films.database.db import ConnectionFactory, get_connection_factory, wait_for_db
from films.errors import NotFound, SchemaViolation, UpstreamFailure
from films.validation import parse_create_params, parse_film_id, validate_put_body
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Films service",
    description="API for managing films list",
    version="1.0.0"
)

@app.on_event("startup")
def startup_event():
    logger.info("Launching the movie service...")
    wait_for_db()
    logger.info("The service is ready to work")

@app.get("/",
         response_class=PlainTextResponse,
         summary="Check that the database is reachable",
         responses={
             503: {"description": "The database is unreachable"}
         })
def liveness(factory: ConnectionFactory = Depends(get_connection_factory)):
    try:
        factory.ping()
    except PyMongoError as e:
        logger.error(f"Liveness check failed: {type(e).__name__}: {str(e)}")
        raise UpstreamFailure(status.HTTP_503_SERVICE_UNAVAILABLE)
    return "It worked!"

@app.post("/films",
          response_model=Film,
          status_code=status.HTTP_200_OK,
          summary="Add a new movie",
          response_description="The data of the created movie",
          responses={
              400: {"description": "A parameter is missing or the year is not a number"},
              500: {"description": "The database could not store the movie"}
          })
def create_film(
        title: str | None = None,
        year: str | None = None,
        actors: str | None = None,
        factory: ConnectionFactory = Depends(get_connection_factory)
):
    film = parse_create_params(title, year, actors)
    document = film.model_dump()

    try:
        with factory.films() as films:
            films.insert_one(document)
    except PyMongoError as e:
        logger.error(f"Error when adding a movie: {type(e).__name__}: {str(e)}")
        raise UpstreamFailure(status.HTTP_500_INTERNAL_SERVER_ERROR)

    created = Film.from_document(document)
    logger.info(f"A new movie has been added: ID {created.id}, {created.title}")
    return created

@app.get("/films/{film_id}",
         response_model=Film,
         summary="Get a movie by ID",
         responses={
             400: {"description": "The ID is malformed"},
             404: {"description": "The movie was not found"},
             503: {"description": "The database could not be read"}
         })
def read_film(film_id: str, factory: ConnectionFactory = Depends(get_connection_factory)):
    object_id = parse_film_id(film_id)

    try:
        with factory.films() as films:
            document = films.find_one({"_id": object_id})
    except PyMongoError as e:
        logger.error(f"Error when reading movie ID {film_id}: {type(e).__name__}: {str(e)}")
        raise UpstreamFailure(status.HTTP_503_SERVICE_UNAVAILABLE)

    if document is None:
        logger.warning(f"A non-existent movie ID was requested {film_id}")
        raise NotFound(film_id)
    film = Film.from_document(document)
    logger.info(f"Movie ID requested {film_id}: {film.title}")
    return film

async def read_film_update(film_id: str, request: Request):
    """Check the path id, then decode and validate the replacement body.

    The body is read here rather than by FastAPI so that a malformed id is
    reported before anything about the body.
    """
    object_id = parse_film_id(film_id)
    try:
        body = await request.json()
    except ValueError:
        raise SchemaViolation("Body must be valid JSON") from None
    return object_id, validate_put_body(film_id, body)

@app.put("/films/{film_id}",
         response_model=Film,
         summary="Replace movie data",
         responses={
             400: {"description": "The ID is malformed"},
             404: {"description": "The movie was not found"},
             422: {"description": "The body does not describe this movie"},
             503: {"description": "The database could not update the movie"}
         })
def update_film(
        film_id: str,
        update: tuple = Depends(read_film_update),
        factory: ConnectionFactory = Depends(get_connection_factory)
):
    object_id, film = update

    try:
        with factory.films() as films:
            document = films.find_one_and_update(
                {"_id": object_id},
                {"$set": film.model_dump()},
                return_document=ReturnDocument.AFTER,
            )
    except PyMongoError as e:
        logger.error(f"Error when updating movie ID {film_id}: {type(e).__name__}: {str(e)}")
        raise UpstreamFailure(status.HTTP_503_SERVICE_UNAVAILABLE)

    if document is None:
        logger.warning(f"Attempt to update a non-existent movie ID {film_id}")
        raise NotFound(film_id)

    updated = Film.from_document(document)
    logger.info(f"Updated movie ID {film_id}: {updated.title}")
    return updated

@app.delete("/films/{film_id}",
            status_code=status.HTTP_204_NO_CONTENT,
            summary="Delete a movie",
            responses={
                400: {"description": "The ID is malformed"},
                404: {"description": "The movie was not found"},
                500: {"description": "The database could not delete the movie"}
            })
def delete_film(film_id: str, factory: ConnectionFactory = Depends(get_connection_factory)):
    object_id = parse_film_id(film_id)

    try:
        with factory.films() as films:
            result = films.delete_one({"_id": object_id})
    except PyMongoError as e:
        logger.error(f"Error when deleting movie ID {film_id}: {type(e).__name__}: {str(e)}")
        raise UpstreamFailure(status.HTTP_500_INTERNAL_SERVER_ERROR)

    if result.deleted_count == 0:
        logger.warning(f"Attempt to delete a non-existent movie ID {film_id}")
        raise NotFound(film_id)

    logger.info(f"Deleted movie ID {film_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("films.main:app", host="0.0.0.0", port=8000)
