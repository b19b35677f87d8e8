"""User API routes."""

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from userapi.errors import bad_input, user_not_found, validation_failure
from userapi.models.user import User, UserPayload
from userapi.services import UserService, get_user_service, paginate, validate_user

router = APIRouter(prefix="/users", tags=["users"], redirect_slashes=False)


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


@router.get("", response_model=list[User], name="GetUsers")
@router.get("/", response_model=list[User], name="GetUsers", include_in_schema=False)
async def list_users(
    page: str | None = Query(None, description="1-based page number"),
    page_size: str | None = Query(None, alias="pageSize", description="Users per page"),
    service: UserService = Depends(get_user_service),
) -> list[User]:
    """List users, optionally windowed by page and pageSize.

    Pagination applies only when both values are positive integers,
    anything else returns the full list.
    """
    return paginate(service.list_users(), _parse_int(page), _parse_int(page_size))


@router.get("/search/{term}", response_model=list[User], name="SearchUsers")
async def search_users(term: str, service: UserService = Depends(get_user_service)) -> list[User]:
    return service.search_users(term)


@router.get("/{user_id}", response_model=User, name="GetUserById")
async def get_user(user_id: int, service: UserService = Depends(get_user_service)) -> User | JSONResponse:
    if user_id <= 0:
        return bad_input("Invalid user ID.")

    user = service.get_user(user_id)
    if user is None:
        return user_not_found(user_id)
    return user


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED, name="CreateUser")
@router.post(
    "/", response_model=User, status_code=status.HTTP_201_CREATED, name="CreateUser", include_in_schema=False
)
async def create_user(
    payload: UserPayload,
    response: Response,
    service: UserService = Depends(get_user_service),
) -> User | JSONResponse:
    errors = validate_user(payload)
    if errors:
        return validation_failure(errors)

    user = service.add_user(payload)
    response.headers["Location"] = f"/users/{user.id}"
    return user


@router.put("/{user_id}", response_model=User, name="UpdateUser")
async def update_user(
    user_id: int,
    payload: UserPayload,
    service: UserService = Depends(get_user_service),
) -> User | JSONResponse:
    if not service.has_user(user_id):
        return user_not_found(user_id)

    errors = validate_user(payload)
    if errors:
        return validation_failure(errors)

    user = service.update_user(user_id, payload)
    if user is None:
        # Deleted between the existence check and the write
        return user_not_found(user_id)
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, name="DeleteUser")
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)) -> Response:
    if not service.delete_user(user_id):
        return user_not_found(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
