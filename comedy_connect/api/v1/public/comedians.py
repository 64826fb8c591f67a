from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from comedy_connect.db.session import get_db
from comedy_connect.schemas.show import ComedianSummary
from comedy_connect.services import profile_service

router = APIRouter(prefix="/comedians", tags=["Comedians"])


@router.get("/", response_model=List[ComedianSummary])
def list_comedians(db: Session = Depends(get_db)):
    """Approved comedians, for the line-up picker and the public directory."""
    return profile_service.list_comedians(db)
