"""Book API router with CRUD operations."""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status
from loguru import logger

from src.bookstore.api.http.deps import get_book_repository
from src.bookstore.api.http.dtos import BookCreateDTO, BookDTO, BookUpdateDTO
from src.bookstore.api.http.responses import (
    action_location,
    bad_request,
    describe_exception,
    internal_error,
    no_content,
    not_found,
)
from src.bookstore.entities import Book, BookRepository

router = APIRouter(prefix="/api/books", tags=["books"])


@router.get("", response_model=list[BookDTO])
def get_books(
    request: Request,
    repository: BookRepository = Depends(get_book_repository),
) -> Any:
    """List all books with their authors."""
    location = action_location(request)
    try:
        books = repository.find_all()
        logger.info("{}: Successful call", location)
        return [BookDTO.model_validate(book) for book in books]
    except Exception as e:
        return internal_error(f"{location}: {describe_exception(e)}")


@router.get("/{id}", response_model=BookDTO)
def get_book(
    id: int,
    request: Request,
    repository: BookRepository = Depends(get_book_repository),
) -> Any:
    """Get a book by id."""
    location = action_location(request)
    try:
        book = repository.find_by_id(id)
        if book is None:
            logger.warning("{}: Record not found: {}", location, id)
            return not_found()
        logger.info("{}: Successful call", location)
        return BookDTO.model_validate(book)
    except Exception as e:
        return internal_error(f"{location}: {describe_exception(e)}")


@router.post("", response_model=BookDTO, status_code=status.HTTP_201_CREATED)
def create_book(
    payload: BookCreateDTO,
    request: Request,
    response: Response,
    repository: BookRepository = Depends(get_book_repository),
) -> Any:
    """Create a book; the body echoes it with its assigned id."""
    location = action_location(request)
    try:
        book = Book.model_validate(payload.model_dump())
        if not repository.create(book):
            return internal_error(f"{location}: Creation failed")

        created = repository.find_by_id(book.id) or book
        response.headers["Location"] = f"/api/books/{book.id}"
        logger.info("{}: Creation successful: {}", location, book.id)
        return BookDTO.model_validate(created)
    except Exception as e:
        return internal_error(f"{location}: {describe_exception(e)}")


@router.put("/{id}", response_model=None, status_code=status.HTTP_204_NO_CONTENT)
def update_book(
    id: int,
    payload: BookUpdateDTO,
    request: Request,
    repository: BookRepository = Depends(get_book_repository),
) -> Response:
    """Replace a book's fields."""
    location = action_location(request)
    try:
        if id < 1 or id != payload.id:
            logger.warning("{}: Update failed with bad data: {}", location, id)
            return bad_request()

        if not repository.exists(id):
            logger.warning("{}: Record not found: {}", location, id)
            return not_found()

        book = Book.model_validate(payload.model_dump())
        if not repository.update(book):
            return internal_error(f"{location}: Update failed")

        logger.info("{}: Update successful: {}", location, id)
        return no_content()
    except Exception as e:
        return internal_error(f"{location}: {describe_exception(e)}")


@router.delete("/{id}", response_model=None, status_code=status.HTTP_204_NO_CONTENT)
def delete_book(
    id: int,
    request: Request,
    repository: BookRepository = Depends(get_book_repository),
) -> Response:
    """Delete a book by id."""
    location = action_location(request)
    try:
        if id < 1:
            logger.warning("{}: Delete failed with bad data: {}", location, id)
            return bad_request()

        book = repository.find_by_id(id)
        if book is None:
            logger.warning("{}: Record not found: {}", location, id)
            return not_found()

        if not repository.delete(book):
            return internal_error(f"{location}: Delete failed")

        logger.info("{}: Delete successful: {}", location, id)
        return no_content()
    except Exception as e:
        return internal_error(f"{location}: {describe_exception(e)}")
