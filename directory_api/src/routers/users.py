"""
Users router.

Provides REST API endpoints for:
- Listing every user
- Creating a user

Store failures propagate as StoreError and are rendered as 500 responses by
the application exception handlers; body validation failures become 400.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from directory_api.src.dependencies import get_user_repository
from directory_api.src.models.user import NewUser, User
from directory_api.src.repositories.user_repo import UserRepository
from shared.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/users",
    tags=["Users"],
    responses={
        500: {"description": "Store operation failed"},
    }
)


@router.get(
    "",
    response_model=List[User],
    status_code=status.HTTP_200_OK,
    summary="List Users",
    description="""
    Get every user in the directory.

    No ordering is guaranteed.

    **Success Response (200):**
    Array of `{id, name}` objects (empty array if there are no users)
    """,
)
async def list_users(
    user_repo: UserRepository = Depends(get_user_repository),
) -> List[User]:
    """List all users."""
    return await user_repo.list_users()


@router.post(
    "",
    response_model=User,
    status_code=status.HTTP_200_OK,
    summary="Create User",
    description="""
    Create a new user.

    **Request Body:**
    - name: Display name (string, required)

    **Success Response (200):**
    The created `{id, name}`

    **Error Responses:**
    - 400: Missing body, malformed JSON, or missing/non-string name
    - 500: Store operation failed
    """,
    responses={
        400: {"description": "Invalid request body"},
    }
)
async def create_user(
    new_user: NewUser,
    user_repo: UserRepository = Depends(get_user_repository),
) -> User:
    """Create a user from the request body."""
    user = await user_repo.create_user(new_user.name)
    logger.info("user_create_succeeded", user_id=user.id)
    return user
