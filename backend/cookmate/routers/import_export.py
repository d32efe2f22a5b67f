"""
Import / Export router: recipe catalog CSV in and out.
"""

from fastapi import APIRouter, Depends, UploadFile, File
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from cookmate.database import get_db
from cookmate.errors import ValidationError
from cookmate.models.user import User
from cookmate.services import catalog
from cookmate.utils.auth import get_current_user

router = APIRouter()


@router.post("/recipes/csv")
async def import_recipes_csv(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Import recipes from a CSV file.

    Rows with no title, unparsable numbers or a different number of
    ingredients and quantities are skipped and listed in ``errors``.
    """
    content = await file.read()
    try:
        text = content.decode("utf-8-sig")  # handle BOM
    except UnicodeDecodeError:
        raise ValidationError("CSV file must be UTF-8 encoded")
    return catalog.import_csv(db, text)


@router.get("/recipes/csv")
def export_recipes_csv(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Export the recipe catalog as a CSV download."""
    return StreamingResponse(
        iter([catalog.export_csv(db)]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=recipes_export.csv"},
    )
