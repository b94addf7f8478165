"""User account endpoints.

Domain errors are not caught here; the handlers registered in
``lumastack.interfaces.http.errors`` turn them into status codes.
"""
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from lumastack.interfaces.http.deps import commit_session, get_account_service, get_db_session
from lumastack.modules.accounts import AccountService, AccountView, to_view
from lumastack.schemas import AccountCreate, AccountResponse, AccountUpdate

router = APIRouter()

MAX_PAGE_SIZE = 100


@router.get("", response_model=List[AccountResponse], summary="List active users")
async def list_users(
    limit: int = Query(50, ge=0, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    account_service: AccountService = Depends(get_account_service),
) -> List[AccountView]:
    accounts = await account_service.list_accounts(limit, offset)
    return [to_view(account) for account in accounts]


@router.post(
    "",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
async def create_user(
    payload: AccountCreate,
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
) -> AccountView:
    account = await account_service.register(payload.to_input())
    await commit_session(db)
    return to_view(account)


@router.get("/{account_id}", response_model=AccountResponse, summary="Get a user")
async def get_user(
    account_id: int,
    account_service: AccountService = Depends(get_account_service),
) -> AccountView:
    return to_view(await account_service.get(account_id))


@router.patch("/{account_id}", response_model=AccountResponse, summary="Update a user")
async def update_user(
    account_id: int,
    payload: AccountUpdate,
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
) -> AccountView:
    account = await account_service.update(account_id, payload.to_patch())
    await commit_session(db)
    return to_view(account)


@router.delete("/{account_id}", response_model=AccountResponse, summary="Deactivate a user")
async def deactivate_user(
    account_id: int,
    account_service: AccountService = Depends(get_account_service),
    db: AsyncSession = Depends(get_db_session),
) -> AccountView:
    account = await account_service.deactivate(account_id)
    await commit_session(db)
    return to_view(account)
