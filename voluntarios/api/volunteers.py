import asyncio
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..core.logging import logger
from ..db.session import get_db
from ..services.registration import RegistrationError, RegistrationService


router = APIRouter()


class VolunteerSubmission(BaseModel):
    name: Optional[str] = ""
    email: Optional[str] = ""
    postal_code: Optional[str] = ""
    address: Optional[str] = ""


def get_registration(db: Session = Depends(get_db)) -> RegistrationService:
    return RegistrationService(db)


@router.get("")
async def list_volunteers(
    query: str = "",
    registration: RegistrationService = Depends(get_registration),
) -> List[Dict[str, Any]]:
    """List volunteers, optionally filtered by name, email or address."""
    result = []
    for position, record in registration.list_volunteers(query):
        result.append({"position": position, **record.model_dump()})
    return result


@router.post("", status_code=201)
async def create_volunteer(
    submission: VolunteerSubmission,
    registration: RegistrationService = Depends(get_registration),
) -> Dict[str, Any]:
    """Register a volunteer, resolving the address from the CEP when not typed."""
    try:
        # ViaCEP lookup blocks; keep it off the event loop
        record = await asyncio.to_thread(
            registration.submit,
            submission.name,
            submission.email,
            submission.postal_code,
            submission.address or "",
        )
    except RegistrationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    return record.model_dump()


@router.delete("", status_code=204)
async def clear_volunteers(registration: RegistrationService = Depends(get_registration)) -> Response:
    """Delete every volunteer. Cannot be undone."""
    registration.clear_all()
    logger.info("[api] all volunteers cleared")
    return Response(status_code=204)


@router.delete("/position/{index}", status_code=204)
async def delete_volunteer_at(
    index: int,
    registration: RegistrationService = Depends(get_registration),
) -> Response:
    registration.remove_at(index)
    return Response(status_code=204)


@router.delete("/{record_id}", status_code=204)
async def delete_volunteer(
    record_id: str,
    registration: RegistrationService = Depends(get_registration),
) -> Response:
    if registration.remove_by_id(record_id) is None:
        raise HTTPException(status_code=404, detail="Not found")
    return Response(status_code=204)
