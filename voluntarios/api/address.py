import asyncio
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db.session import get_db
from ..services.kv_store import KeyValueStore
from ..services.registration import MESSAGES, ADDRESS_NOT_FOUND, RegistrationService
from ..services.session_activity import SessionActivity
from ..services.validation import ValidationFailure, is_valid_postal_code, normalize_postal_code


router = APIRouter()


@router.get("/address/{cep}")
async def lookup_address(cep: str, db: Session = Depends(get_db)) -> Dict[str, str]:
    """Prefill the address field from a CEP."""
    if not is_valid_postal_code(cep):
        raise HTTPException(
            status_code=400,
            detail={
                "reason": ValidationFailure.INVALID_POSTAL_CODE.value,
                "message": MESSAGES[ValidationFailure.INVALID_POSTAL_CODE],
            },
        )

    address = await asyncio.to_thread(RegistrationService(db).lookup_address, cep)
    if not address:
        raise HTTPException(
            status_code=404,
            detail={"reason": ADDRESS_NOT_FOUND, "message": MESSAGES[ADDRESS_NOT_FOUND]},
        )
    return {"cep": normalize_postal_code(cep), "address": address}


@router.post("/session/activity")
async def session_activity(db: Session = Depends(get_db)) -> Dict[str, bool]:
    """Refresh the inactivity window; active=False means the session expired."""
    return {"active": SessionActivity(KeyValueStore(db)).check()}
