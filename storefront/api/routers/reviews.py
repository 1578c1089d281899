# storefront/api/routers/reviews.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile

from storefront.api.deps import get_current_user, get_review_service
from storefront.data.models.user import UserModel
from storefront.domain.errors import InvalidInput
from storefront.domain.schemas import MessageOut
from storefront.services.review_service import REVIEW_IMAGE_MEDIA_TYPE, ReviewService

router = APIRouter(prefix="/order/{order_id}/review", tags=["reviews"])


def _read_images(files: List[UploadFile], max_images: int, max_bytes: int) -> List[bytes]:
    if len(files) > max_images:
        raise InvalidInput(f"At most {max_images} images allowed")

    blobs = []
    for f in files:
        # czytamy o bajt więcej niż limit żeby wykryć za duży plik
        data = f.file.read(max_bytes + 1)
        if len(data) > max_bytes:
            raise InvalidInput(f"Image {f.filename} exceeds {max_bytes} bytes")
        blobs.append(data)
    return blobs


@router.post("", response_model=MessageOut)
def add_review(
    order_id: str,
    rating: Optional[str] = Form(None),
    comment: Optional[str] = Form(None),
    images: Optional[List[UploadFile]] = File(None),
    user: UserModel = Depends(get_current_user),
    svc: ReviewService = Depends(get_review_service),
):
    blobs = _read_images(images or [], svc.max_images, svc.max_image_bytes)
    svc.add_review(user, order_id, comment=comment, rating=rating, images=blobs)
    return MessageOut(message="Review added successfully")


@router.delete("", response_model=MessageOut)
def delete_review(
    order_id: str,
    user: UserModel = Depends(get_current_user),
    svc: ReviewService = Depends(get_review_service),
):
    svc.delete_review(user, order_id)
    return MessageOut(message="Review deleted")


@router.get("/image/{index}", name="get_review_image")
def get_review_image(
    order_id: str,
    index: int,
    user: UserModel = Depends(get_current_user),
    svc: ReviewService = Depends(get_review_service),
):
    data = svc.get_review_image(user, order_id, index)
    return Response(content=data, media_type=REVIEW_IMAGE_MEDIA_TYPE)
