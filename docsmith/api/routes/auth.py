from typing import Optional
import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from pydantic import ValidationError as PydanticValidationError

from docsmith.api.dependencies import get_auth_service, get_current_user
from docsmith.errors import ValidationError
from docsmith.models.responses import SuccessResponse
from docsmith.models.user import LoginRequest, LoginResult, User, UserCreate, UserPublic
from docsmith.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=SuccessResponse[UserPublic],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user"
)
async def register_user(
    first_name: str = Form(...),
    last_name: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    phone: Optional[str] = Form(None),
    profile_image: Optional[UploadFile] = File(None),
    service: AuthService = Depends(get_auth_service)
):
    """
    Multipart registration with an optional profile picture.
    """
    try:
        user = UserCreate(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone or None,
            password=password,
        )
    except PydanticValidationError as e:
        details = {}
        for error in e.errors():
            details.setdefault(".".join(str(p) for p in error["loc"]), []).append(error["msg"])
        raise ValidationError("Invalid registration data", details)

    created = await service.register(user, profile_image)
    return SuccessResponse(message="User registered successfully", data=created)


@router.post(
    "/login",
    response_model=SuccessResponse[LoginResult],
    summary="Exchange credentials for a bearer token"
)
async def login_user(
    credentials: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    result = await service.login(credentials.email, credentials.password)
    return SuccessResponse(message="Login successful", data=result)


@router.get(
    "/profile",
    response_model=SuccessResponse[UserPublic],
    summary="Get the authenticated user's profile"
)
async def get_user_profile(user: User = Depends(get_current_user)):
    return SuccessResponse(data=user.public())
