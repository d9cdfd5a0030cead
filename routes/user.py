import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, EmailStr
from pymongo.errors import DuplicateKeyError

from database import USERS, fetch_all, get_db, normalize_email, serialize
from routes.auth import verify_admin

logger = logging.getLogger(__name__)

router = APIRouter()


# -------------------------------
# ✏️ Model for user input
# -------------------------------
class UserIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    name: Optional[str] = None
    photo: Optional[str] = None
    role: Literal["buyer"] = "buyer"


# -------------------------------
# 👤 Create a user (idempotent)
# -------------------------------
@router.post("/create-user")
async def create_user(user: UserIn, db=Depends(get_db)):
    users = db[USERS]
    existing = await users.find_one({"email": user.email})
    if existing:
        return serialize(existing)

    doc = user.model_dump()
    try:
        await users.insert_one(doc)
    except DuplicateKeyError:
        # Lost a race against a concurrent create for the same email
        return serialize(await users.find_one({"email": user.email}))

    logger.info(f"Created user {user.email}")
    return {"success": True, "message": "User created successfully!", "user": serialize(doc)}


# -------------------------------
# 📄 Get all users
# -------------------------------
@router.get("/users")
async def get_all_users(db=Depends(get_db), _admin=Depends(verify_admin)):
    return {"users": await fetch_all(db[USERS])}


# -------------------------------
# 🔍 Get a user by email
# -------------------------------
@router.get("/users/{email}")
async def get_user(email: str, db=Depends(get_db)):
    user = await db[USERS].find_one({"email": normalize_email(email)})
    return {"user": serialize(user)}


# -------------------------------
# ⬆️ Promote a buyer to seller
# -------------------------------
@router.patch("/update-role/{email}")
async def update_role(email: str, db=Depends(get_db), _admin=Depends(verify_admin)):
    email = normalize_email(email)
    users = db[USERS]
    user = await users.find_one({"email": email})
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if user.get("role") != "buyer":
        logger.info(f"Role update refused for {email}: role is {user.get('role')}")
        raise HTTPException(status_code=409, detail="User is already seller")

    result = await users.update_one({"email": email}, {"$set": {"role": "seller"}})
    logger.info(f"Promoted {email} to seller")
    return {"modifiedCount": result.modified_count, "matchedCount": result.matched_count}
