from fastapi import APIRouter, Depends
from pydantic import Field

from database import CARTS, get_db, insert_result
from routes.auth import verify_buyer
from routes.wishlist import WishlistIn

router = APIRouter()


# --- Request Models ---
class CartIn(WishlistIn):
    quantity: int = Field(default=1, ge=1)


# -------------------------------
# POST /create-cart – Append entry
# -------------------------------
@router.post("/create-cart")
async def create_cart(entry: CartIn, db=Depends(get_db), _buyer=Depends(verify_buyer)):
    result = await db[CARTS].insert_one(entry.model_dump())
    return {"message": "Add to cart", "data": insert_result(result)}
