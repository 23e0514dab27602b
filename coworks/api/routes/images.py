import io

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from PIL import Image, UnidentifiedImageError
from sqlalchemy.orm import Session

from coworks.core.dependencies import AdminSession, get_db, get_admin_session
from coworks.core.logging_config import get_logger
from coworks.models.location import Location
from coworks.models.space import Space
from coworks.services.catalog import invalidate_catalog
from coworks.utils.cloudinary_utils import upload_image

router = APIRouter(prefix="/admin/images", tags=["Images"])
logger = get_logger()

ALLOWED_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp"
}

TARGETS = {
    "locations": Location,
    "spaces": Space,
}


# =====================================================================
#                  CONVERT ANY IMAGE TO JPEG (AUTO-CONVERT)
# =====================================================================
def convert_to_jpeg(upload_file: UploadFile) -> bytes:
    contents = upload_file.file.read()

    try:
        img = Image.open(io.BytesIO(contents)).convert("RGB")
    except UnidentifiedImageError:
        raise HTTPException(status_code=400, detail="Invalid image file")

    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=90)
    buffer.seek(0)

    return buffer.read()


# =====================================================================
#                  UPLOAD COVER IMAGE (location or space)
# =====================================================================
@router.post("/{target}/{item_id}")
def upload_cover_image(
    target: str,
    item_id: int,
    file: UploadFile = File(...),
    session: AdminSession = Depends(get_admin_session),
    db: Session = Depends(get_db)
):
    model = TARGETS.get(target)
    if model is None:
        raise HTTPException(status_code=404, detail=f"Unknown image target '{target}'")

    item = db.query(model).filter(model.id == item_id).first()
    if not item:
        raise HTTPException(status_code=404, detail=f"{model.__name__} not found")

    if (file.content_type or "").lower() not in ALLOWED_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type {file.content_type}. Allowed: JPEG, JPG, PNG, WEBP"
        )

    result = upload_image(convert_to_jpeg(file), folder=f"coworks/{target}")
    if not result:
        raise HTTPException(status_code=500, detail="Cloud upload failed")

    item.image_url = result["url"]
    db.commit()
    invalidate_catalog()

    logger.bind(log_type="admin", actor=session.email).info(
        f"{model.__name__} {item_id} image set to {result['public_id']}"
    )

    return {"message": "Image uploaded successfully", "image_url": item.image_url}
