"""Utility for resolving bank account names to IDs."""

from bankledger.domain.account import AccountService
from bankledger.domain.errors import NotFoundError, account_name_not_found, account_not_found


def resolve_account(account_service: AccountService, owner_user_id: int, account: str | int) -> int:
    """Resolve a bank account name or ID to an account ID.

    A value that parses as an integer is tried as an ID first, then as a name,
    so a bank literally named "2024" still resolves.

    Args:
        account_service: AccountService instance
        owner_user_id: Acting user
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If no account of this user matches
    """
    if isinstance(account, int):
        if account_service.get_account(owner_user_id, account) is None:
            raise NotFoundError(account_not_found(account))
        return account

    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None

    if account_id is not None and account_service.get_account(owner_user_id, account_id) is not None:
        return account_id

    account_obj = account_service.get_account_by_name(owner_user_id, account)
    if account_obj is not None:
        return account_obj.id

    if account_id is not None:
        raise NotFoundError(account_not_found(account_id))
    raise NotFoundError(account_name_not_found(account))
