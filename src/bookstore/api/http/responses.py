"""Shared outcomes for router handlers."""

from fastapi import Request, status
from fastapi.responses import JSONResponse, Response
from loguru import logger

GENERIC_ERROR_MESSAGE = "Something went wrong. Please contact Administrator"


def action_location(request: Request) -> str:
    """Label a handler as ``"<Controller> - <action>"`` for log lines.

    The controller is the resource segment after ``/api/``; the action is
    the endpoint function name.
    """
    segments = [s for s in request.url.path.split("/") if s]
    if len(segments) >= 2 and segments[0] == "api":
        controller = segments[1].capitalize()
    else:
        controller = segments[0].capitalize() if segments else "Root"

    endpoint = request.scope.get("endpoint")
    action = getattr(endpoint, "__name__", request.method.lower())
    return f"{controller} - {action}"


def describe_exception(exc: BaseException) -> str:
    cause = exc.__cause__ or exc.__context__
    return f"{type(exc).__name__}: {exc} - {cause!r}" if cause else f"{type(exc).__name__}: {exc}"


def internal_error(message: str) -> JSONResponse:
    """Log the detail server-side and answer with the generic 500 body."""
    logger.error(message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": GENERIC_ERROR_MESSAGE},
    )


def bad_request(detail: str | list | None = None) -> Response:
    if detail is None:
        return Response(status_code=status.HTTP_400_BAD_REQUEST)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


def not_found() -> Response:
    return Response(status_code=status.HTTP_404_NOT_FOUND)


def no_content() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)
