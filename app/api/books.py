"""API роуты книг."""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session, joinedload
from app.database import get_db
from app.models.book import Book
from app.models.user import User, ROLE_PUBLISHER, ROLE_ADMIN
from app.schemas.book import BookCreate, BookUpdate, BookResponse
from app.schemas.common import DataResponse, EmptyResponse, ListResponse, PaginatedResponse
from app.services.auth import require_roles
from app.services.books import BookService
from app.services.query import paginate_query, render_page

router = APIRouter(tags=["books"])

publisher_or_admin = require_roles(ROLE_PUBLISHER, ROLE_ADMIN)


@router.get("/books", response_model=PaginatedResponse[BookResponse])
async def get_books(request: Request, db: Session = Depends(get_db)):
    """Получить список всех книг с фильтрами и пагинацией."""
    query = db.query(Book).options(joinedload(Book.house))
    result = paginate_query(query, Book, request.query_params, request.app.state.settings)
    result["data"] = [BookResponse.model_validate(book) for book in result["data"]]
    return render_page(result)


@router.get("/houses/{house_id}/books", response_model=ListResponse[BookResponse])
async def get_house_books(house_id: int, db: Session = Depends(get_db)):
    """Получить все книги дома."""
    books = [BookResponse.model_validate(book) for book in BookService(db).list_by_house(house_id)]
    return {"success": True, "count": len(books), "data": books}


@router.get("/books/{book_id}", response_model=DataResponse[BookResponse])
async def get_book(book_id: int, db: Session = Depends(get_db)):
    """Получить книгу по ID (с кратким описанием дома)."""
    book = BookService(db).get(book_id)
    return {"success": True, "data": BookResponse.model_validate(book)}


@router.post("/houses/{house_id}/books", response_model=DataResponse[BookResponse])
async def create_book(
    house_id: int,
    payload: BookCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(publisher_or_admin)
):
    """
    Добавить книгу в дом.

    Проверяет:
    - Существование дома
    - Что текущий пользователь - владелец дома или админ
    """
    book = BookService(db).create(house_id, payload, current_user)
    return {"success": True, "data": BookResponse.model_validate(book)}


@router.put("/books/{book_id}", response_model=DataResponse[BookResponse])
async def update_book(
    book_id: int,
    payload: BookUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(publisher_or_admin)
):
    """Обновить книгу (владелец или админ)."""
    book = BookService(db).update(book_id, payload, current_user)
    return {"success": True, "data": BookResponse.model_validate(book)}


@router.delete("/books/{book_id}", response_model=EmptyResponse)
async def delete_book(
    book_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(publisher_or_admin)
):
    """Удалить книгу (владелец или админ)."""
    BookService(db).delete(book_id, current_user)
    return {"success": True, "data": {}}
