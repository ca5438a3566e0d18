# routers/category_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog_api.auth import require_admin
from blog_api.routers.params import IdPath
from blog_api.schemas.category_schema import CategoryCreate, CategoryEnvelope, CategoryListEnvelope
from blog_api.schemas.common_schema import MessageOut
from blog_api.services.category_service import CategoryService
from blog_api.services.db_service import get_db

router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(require_admin)])
category_service = CategoryService()


# CATEGORY 목록
@router.get("", response_model=CategoryListEnvelope)
def list_categories(db: Session = Depends(get_db)):
    return {"categories": category_service.list_categories(db)}


# CATEGORY 생성
@admin_router.post("", response_model=CategoryEnvelope, status_code=status.HTTP_201_CREATED)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    return {"category": category_service.create_category(db, payload)}


# CATEGORY 삭제
@admin_router.delete("/{category_id}", response_model=MessageOut)
def delete_category(category_id: IdPath, db: Session = Depends(get_db)):
    category_service.delete_category(db, category_id)
    return {"message": "Category deleted successfully"}
