# laundry_api/routes/users.py
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from laundry_api import crud, schemas
from laundry_api.auth import TokenService, get_token_service
from laundry_api.database import get_db
from laundry_api.validation import require_fields

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])

CREDENTIAL_FIELDS = ("username", "password")


@router.post("/register", response_model=schemas.MessageResponse)
def register_user(request: Request, user: schemas.UserCredentials, db: Session = Depends(get_db)):
    values = require_fields(user, CREDENTIAL_FIELDS, "Username and password required")
    crud.register_user(db, values["username"], values["password"], rounds=request.app.state.settings.BCRYPT_ROUNDS)
    return {"message": "User registered successfully"}


@router.post("/login", response_model=schemas.LoginResponse)
def login_user(
    user: schemas.UserCredentials,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    values = require_fields(user, CREDENTIAL_FIELDS, "Username and password required")
    db_user = crud.authenticate_user(db, values["username"], values["password"])

    token = tokens.issue(db_user.id, db_user.username)
    logger.info("Login: %s (%s)", db_user.username, db_user.id)
    return {"token": token, "user_id": db_user.id}
