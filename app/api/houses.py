"""API роуты домов."""
from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.house import House
from app.models.user import User, ROLE_PUBLISHER, ROLE_ADMIN
from app.schemas.common import DataResponse, EmptyResponse, MessageResponse, PaginatedResponse
from app.schemas.book import BookSummary, HouseWithBooksResponse
from app.schemas.house import HouseCreate, HouseUpdate, HouseResponse
from app.services.auth import require_roles
from app.services.houses import HouseService
from app.services.lifecycle import list_books_by_houses
from app.services.query import paginate_query, render_page

router = APIRouter(prefix="/houses", tags=["houses"])

publisher_or_admin = require_roles(ROLE_PUBLISHER, ROLE_ADMIN)


@router.get("", response_model=PaginatedResponse[HouseWithBooksResponse])
async def get_houses(request: Request, db: Session = Depends(get_db)):
    """
    Получить список домов вместе с их книгами.

    Поддерживает фильтры по полям (`housing=true`, `average_rating__gte=5`),
    сортировку (`sort=-average_rating,name`), выбор полей (`select=name,slug`)
    и пагинацию (`page`, `limit`).
    """
    result = paginate_query(db.query(House), House, request.query_params, request.app.state.settings)
    books = list_books_by_houses(db, [house.id for house in result["data"]])
    result["data"] = [
        HouseWithBooksResponse.model_validate(house).model_copy(
            update={"books": [BookSummary.model_validate(book) for book in books[house.id]]}
        )
        for house in result["data"]
    ]
    return render_page(result, extra_fields=("books",))


@router.get("/{house_id}", response_model=DataResponse[HouseResponse])
async def get_house(house_id: int, db: Session = Depends(get_db)):
    """Получить дом по ID."""
    house = HouseService(db).get(house_id)
    return {"success": True, "data": HouseResponse.model_validate(house)}


@router.post("", response_model=DataResponse[HouseResponse], status_code=status.HTTP_201_CREATED)
async def create_house(
    payload: HouseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(publisher_or_admin)
):
    """
    Создать дом.

    Владельцем становится текущий пользователь. Не-админ может
    опубликовать только один дом.
    """
    house = HouseService(db).create(payload, current_user)
    return {"success": True, "data": HouseResponse.model_validate(house)}


@router.put("/{house_id}", response_model=DataResponse[HouseResponse])
async def update_house(
    house_id: int,
    payload: HouseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(publisher_or_admin)
):
    """Обновить дом (владелец или админ)."""
    house = HouseService(db).update(house_id, payload, current_user)
    return {"success": True, "data": HouseResponse.model_validate(house)}


@router.delete("/{house_id}", response_model=EmptyResponse)
async def delete_house(
    house_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(publisher_or_admin)
):
    """Удалить дом вместе с его книгами и отзывами."""
    HouseService(db).delete(house_id, current_user)
    return {"success": True, "data": {}}


@router.put("/{house_id}/photo", response_model=MessageResponse)
async def upload_house_photo(
    house_id: int,
    request: Request,
    file: UploadFile = File(..., description="Фото дома"),
    db: Session = Depends(get_db),
    current_user: User = Depends(publisher_or_admin)
):
    """Загрузить фото дома. Возвращает имя сохраненного файла."""
    settings = request.app.state.settings
    # Не больше лимита + 1 байт: этого хватает, чтобы отклонить слишком большой файл
    content = await file.read(settings.MAX_FILE_UPLOAD + 1)
    photo_name = HouseService(db).upload_photo(
        house_id,
        current_user,
        filename=file.filename,
        content_type=file.content_type,
        content=content,
        settings=settings
    )
    return {"success": True, "data": photo_name}
