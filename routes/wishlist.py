from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from database import WISHLISTS, get_db, insert_result
from routes.auth import verify_buyer

router = APIRouter()


class WishlistIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    product_id: str
    name: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    image: Optional[str] = None


@router.post("/create-wishlist")
async def create_wishlist(entry: WishlistIn, db=Depends(get_db), _buyer=Depends(verify_buyer)):
    result = await db[WISHLISTS].insert_one(entry.model_dump())
    return {"message": "Add to wishlist", "data": insert_result(result)}
