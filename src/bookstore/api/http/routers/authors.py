"""Author API router; reads need a session token, writes need an administrator."""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status
from loguru import logger

from src.bookstore.api.http.deps import (
    get_author_repository,
    get_current_user,
    require_admin,
)
from src.bookstore.api.http.dtos import AuthorCreateDTO, AuthorDTO, AuthorUpdateDTO
from src.bookstore.api.http.responses import (
    action_location,
    bad_request,
    describe_exception,
    internal_error,
    no_content,
    not_found,
)
from src.bookstore.entities import Author, AuthorRepository

router = APIRouter(prefix="/api/authors", tags=["authors"])


@router.get("", response_model=list[AuthorDTO], dependencies=[Depends(get_current_user)])
def get_authors(
    request: Request,
    repository: AuthorRepository = Depends(get_author_repository),
) -> Any:
    location = action_location(request)
    try:
        authors = repository.find_all()
        logger.info("{}: Successful call", location)
        return [AuthorDTO.model_validate(author) for author in authors]
    except Exception as e:
        return internal_error(f"{location}: {describe_exception(e)}")


@router.get("/{id}", response_model=AuthorDTO, dependencies=[Depends(get_current_user)])
def get_author(
    id: int,
    request: Request,
    repository: AuthorRepository = Depends(get_author_repository),
) -> Any:
    location = action_location(request)
    try:
        author = repository.find_by_id(id)
        if author is None:
            logger.warning("{}: Record not found: {}", location, id)
            return not_found()
        logger.info("{}: Successful call", location)
        return AuthorDTO.model_validate(author)
    except Exception as e:
        return internal_error(f"{location}: {describe_exception(e)}")


@router.post(
    "",
    response_model=AuthorDTO,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_author(
    payload: AuthorCreateDTO,
    request: Request,
    response: Response,
    repository: AuthorRepository = Depends(get_author_repository),
) -> Any:
    location = action_location(request)
    try:
        author = Author.model_validate(payload.model_dump())
        if not repository.create(author):
            return internal_error(f"{location}: Creation failed")

        response.headers["Location"] = f"/api/authors/{author.id}"
        logger.info("{}: Creation successful: {}", location, author.id)
        return AuthorDTO.model_validate(author)
    except Exception as e:
        return internal_error(f"{location}: {describe_exception(e)}")


@router.put(
    "/{id}",
    response_model=None,
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def update_author(
    id: int,
    payload: AuthorUpdateDTO,
    request: Request,
    repository: AuthorRepository = Depends(get_author_repository),
) -> Response:
    location = action_location(request)
    try:
        if id < 1 or id != payload.id:
            logger.warning("{}: Update failed with bad data: {}", location, id)
            return bad_request()

        if not repository.exists(id):
            logger.warning("{}: Record not found: {}", location, id)
            return not_found()

        author = Author.model_validate(payload.model_dump())
        if not repository.update(author):
            return internal_error(f"{location}: Update failed")

        logger.info("{}: Update successful: {}", location, id)
        return no_content()
    except Exception as e:
        return internal_error(f"{location}: {describe_exception(e)}")


@router.delete(
    "/{id}",
    response_model=None,
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_author(
    id: int,
    request: Request,
    repository: AuthorRepository = Depends(get_author_repository),
) -> Response:
    location = action_location(request)
    try:
        if id < 1:
            logger.warning("{}: Delete failed with bad data: {}", location, id)
            return bad_request()

        author = repository.find_by_id(id)
        if author is None:
            logger.warning("{}: Record not found: {}", location, id)
            return not_found()

        if not repository.delete(author):
            return internal_error(f"{location}: Delete failed")

        logger.info("{}: Delete successful: {}", location, id)
        return no_content()
    except Exception as e:
        return internal_error(f"{location}: {describe_exception(e)}")
