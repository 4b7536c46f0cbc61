import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from tweeteroo.schemas.user_schema import SignUpRequest
from tweeteroo.services.errors import UsernameTakenError
from tweeteroo.services.stores import UserStore, get_user_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["User"])


@router.post("/sign-up", status_code=status.HTTP_201_CREATED)
def sign_up(user_data: SignUpRequest, users: UserStore = Depends(get_user_store)):
    if users.exists(user_data.username):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"message": "Username already exists"}
        )

    try:
        users.create(user_data.username, user_data.avatar)
    except UsernameTakenError:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"message": "Username already exists"}
        )

    logger.info("User signed up: %s", user_data.username)
    return {"message": "User logged in successfully"}
