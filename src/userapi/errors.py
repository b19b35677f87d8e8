"""Error responses returned by the API.

Each failure kind maps to one factory so that handlers and middleware build
identical bodies:

    AuthenticationFailure  401  {"error": "Unauthorized"}
    ValidationFailure      400  ["Name is required.", ...]
    NotFound               404  "User with ID 7 not found."
    BadInput               400  "Invalid user ID."
    InternalFailure        500  {"error": "Internal server error."}
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


def unauthorized() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"error": "Unauthorized"})


def validation_failure(messages: list[str]) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=messages)


def bad_input(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=message)


def user_not_found(user_id: int) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=f"User with ID {user_id} not found.")


def internal_server_error() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error."},
    )


def _format_error(error: dict) -> str:
    # Drop the "body"/"path"/"query" prefix FastAPI puts in front of the field
    location = ".".join(str(part) for part in error.get("loc", ())[1:])
    message = error.get("msg", "Invalid value.")
    return f"{location}: {message}" if location else message


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report requests FastAPI could not parse as a 400 with a list of messages."""
    return validation_failure([_format_error(error) for error in exc.errors()])
