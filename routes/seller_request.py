import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, EmailStr
from pymongo.errors import DuplicateKeyError

from database import REQUESTS, fetch_all, get_db, normalize_email
from routes.auth import verify_admin

logger = logging.getLogger(__name__)

router = APIRouter()


class SellerRequestIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    name: Optional[str] = None
    shop_name: Optional[str] = None
    message: Optional[str] = None


def already_requested():
    return HTTPException(status_code=409, detail="Already requested")


# -----------------------------------
# POST /create-request – One per email
# -----------------------------------
@router.post("/create-request")
async def create_request(body: SellerRequestIn, db=Depends(get_db)):
    requests = db[REQUESTS]
    if await requests.find_one({"email": body.email}):
        logger.info(f"Duplicate seller request from {body.email}")
        raise already_requested()

    try:
        result = await requests.insert_one(body.model_dump())
    except DuplicateKeyError:
        raise already_requested()

    return {"message": "Request successful", "insertedId": str(result.inserted_id)}


# -----------------------------------
# GET /requests – List all
# -----------------------------------
@router.get("/requests")
async def get_requests(db=Depends(get_db), _admin=Depends(verify_admin)):
    return {"requests": await fetch_all(db[REQUESTS])}


# -----------------------------------
# DELETE /delete-request/{email}
# -----------------------------------
@router.delete("/delete-request/{email}")
async def delete_request(email: str, db=Depends(get_db), _admin=Depends(verify_admin)):
    result = await db[REQUESTS].delete_many({"email": normalize_email(email)})
    return {"message": "Request deleted", "deletedCount": result.deleted_count}
