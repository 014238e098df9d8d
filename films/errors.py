from fastapi import HTTPException, status


class FilmError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None, **extra):
        detail = {"error": type(self).__name__, "message": message, **extra}
        super().__init__(status_code=status_code or self.status_code, detail=detail)


class MissingParameter(FilmError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, missing: list[str]):
        super().__init__(f"Missing parameters: {', '.join(missing)}", missing=missing)


class InvalidType(FilmError):
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidId(FilmError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, film_id: str):
        super().__init__(f"'{film_id}' is not a valid film id")


class SchemaViolation(FilmError):
    # literal: starlette renamed the 422 constant between releases
    status_code = 422


class NotFound(FilmError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, film_id: str):
        super().__init__(f"The movie {film_id} was not found")


class UpstreamFailure(FilmError):
    """The store raised while serving the request.

    The driver error is logged by the caller and never copied into the body.
    """

    def __init__(self, status_code: int = status.HTTP_503_SERVICE_UNAVAILABLE):
        super().__init__("The database could not complete the operation", status_code=status_code)
