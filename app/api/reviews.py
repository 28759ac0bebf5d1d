"""API роуты отзывов."""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session, joinedload
from app.database import get_db
from app.models.review import Review
from app.models.user import User, ROLE_USER, ROLE_ADMIN
from app.schemas.common import DataResponse, EmptyResponse, ListResponse, PaginatedResponse
from app.schemas.review import ReviewCreate, ReviewUpdate, ReviewResponse
from app.services.auth import require_roles
from app.services.reviews import ReviewService
from app.services.query import paginate_query, render_page

router = APIRouter(tags=["reviews"])

user_or_admin = require_roles(ROLE_USER, ROLE_ADMIN)


@router.get("/reviews", response_model=PaginatedResponse[ReviewResponse])
async def get_reviews(request: Request, db: Session = Depends(get_db)):
    """Получить список всех отзывов с фильтрами и пагинацией."""
    query = db.query(Review).options(joinedload(Review.house))
    result = paginate_query(query, Review, request.query_params, request.app.state.settings)
    result["data"] = [ReviewResponse.model_validate(review) for review in result["data"]]
    return render_page(result)


@router.get("/houses/{house_id}/reviews", response_model=ListResponse[ReviewResponse])
async def get_house_reviews(house_id: int, db: Session = Depends(get_db)):
    """Получить все отзывы о доме."""
    reviews = [ReviewResponse.model_validate(review) for review in ReviewService(db).list_by_house(house_id)]
    return {"success": True, "count": len(reviews), "data": reviews}


@router.get("/reviews/{review_id}", response_model=DataResponse[ReviewResponse])
async def get_review(review_id: int, db: Session = Depends(get_db)):
    """Получить отзыв по ID."""
    review = ReviewService(db).get(review_id)
    return {"success": True, "data": ReviewResponse.model_validate(review)}


@router.post(
    "/houses/{house_id}/reviews",
    response_model=DataResponse[ReviewResponse],
    status_code=status.HTTP_201_CREATED
)
async def create_review(
    house_id: int,
    payload: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(user_or_admin)
):
    """Оставить отзыв о доме. Один отзыв на пользователя и дом."""
    review = ReviewService(db).create(house_id, payload, current_user)
    return {"success": True, "data": ReviewResponse.model_validate(review)}


@router.put("/reviews/{review_id}", response_model=DataResponse[ReviewResponse])
async def update_review(
    review_id: int,
    payload: ReviewUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(user_or_admin)
):
    """Обновить отзыв (автор или админ)."""
    review = ReviewService(db).update(review_id, payload, current_user)
    return {"success": True, "data": ReviewResponse.model_validate(review)}


@router.delete("/reviews/{review_id}", response_model=EmptyResponse)
async def delete_review(
    review_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(user_or_admin)
):
    """Удалить отзыв (автор или админ)."""
    ReviewService(db).delete(review_id, current_user)
    return {"success": True, "data": {}}
