import logging
from typing import Optional

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator

from database import (
    PRODUCTS, delete_result, fetch_all, get_db, insert_result, serialize, update_result,
)
from routes.auth import verify_seller

logger = logging.getLogger(__name__)

router = APIRouter()


# -------------------------------
# ✏️ Models for product input
# -------------------------------
class ProductIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    price: float = Field(ge=0)
    category: Optional[str] = None
    description: str = ""
    image: str = ""
    stock: Optional[int] = Field(default=None, ge=0)
    seller_email: Optional[EmailStr] = None


class ProductUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)
    seller_email: Optional[EmailStr] = None

    @field_validator("name", "price", "description", "image")
    @classmethod
    def reject_null(cls, value):
        # Omit a field to keep it; null would erase a required value
        if value is None:
            raise ValueError("may not be null")
        return value


def parse_product_id(product_id: str) -> ObjectId:
    if not ObjectId.is_valid(product_id):
        raise HTTPException(status_code=400, detail="Invalid product ID")
    return ObjectId(product_id)


# -------------------------------
# 📦 Add a new product
# -------------------------------
@router.post("/create-product")
async def create_product(product: ProductIn, db=Depends(get_db), _seller=Depends(verify_seller)):
    result = await db[PRODUCTS].insert_one(product.model_dump())
    return {"message": "Product saved", "data": insert_result(result)}


# -------------------------------
# 📄 Get all products
# -------------------------------
@router.get("/products")
async def get_all_products(db=Depends(get_db)):
    return {"products": await fetch_all(db[PRODUCTS])}


# -------------------------------
# 🔍 Get a product by ID
# -------------------------------
@router.get("/products/{product_id}")
async def get_product(product_id: str, db=Depends(get_db)):
    product = await db[PRODUCTS].find_one({"_id": parse_product_id(product_id)})
    return {"product": serialize(product)}


# -------------------------------
# ✏️ Replace product fields (upsert)
# -------------------------------
@router.put("/update-product/{product_id}")
async def update_product(
    product_id: str,
    product: ProductUpdate,
    db=Depends(get_db),
    _seller=Depends(verify_seller),
):
    oid = parse_product_id(product_id)
    fields = product.model_dump(exclude_unset=True)
    if not fields:
        raise HTTPException(status_code=422, detail="No fields to update")

    products = db[PRODUCTS]
    if not await products.find_one({"_id": oid}):
        # Upsert creates a new product, so it must be complete
        try:
            fields = ProductIn.model_validate(fields).model_dump()
        except ValidationError as exc:
            raise RequestValidationError(exc.errors(include_url=False, include_context=False))

    result = await products.update_one({"_id": oid}, {"$set": fields}, upsert=True)
    return {"message": "Product update successfully", "data": update_result(result)}


# -------------------------------
# 🗑️ Delete a product
# -------------------------------
@router.delete("/delete-product/{product_id}")
async def delete_product(product_id: str, db=Depends(get_db), _seller=Depends(verify_seller)):
    result = await db[PRODUCTS].delete_one({"_id": parse_product_id(product_id)})
    logger.info(f"Deleted product {product_id}: {result.deleted_count} removed")
    return {"message": "Product deleted successfully", "data": delete_result(result)}
