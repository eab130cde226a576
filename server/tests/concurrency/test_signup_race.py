"""Signup races that slip past the existence check."""

import pytest
from sqlalchemy import func, select

from easytrip.core.exceptions import DuplicateAccountError
from easytrip.models import Account


@pytest.mark.asyncio
async def test_unique_index_rejects_racing_signup(auth_service, test_session, monkeypatch):
    """
    Simulate two signups that both pass the lookup before either commits.

    The lookup is forced to report no account, so only the unique index on
    the email column stands between the second insert and a duplicate row.
    """
    await auth_service.signup("racer@example.com", "secret1")

    async def nobody(email):
        return None

    monkeypatch.setattr(auth_service, "get_account_by_email", nobody)

    with pytest.raises(DuplicateAccountError):
        await auth_service.signup("RACER@example.com", "secret2")

    result = await test_session.execute(
        select(func.count()).select_from(Account).where(Account.email == "racer@example.com")
    )
    assert result.scalar_one() == 1


@pytest.mark.asyncio
async def test_session_usable_after_rejected_race(auth_service, monkeypatch):
    """The rolled-back session still serves the next signup."""
    await auth_service.signup("racer@example.com", "secret1")

    async def nobody(email):
        return None

    monkeypatch.setattr(auth_service, "get_account_by_email", nobody)
    with pytest.raises(DuplicateAccountError):
        await auth_service.signup("racer@example.com", "secret1")
    monkeypatch.undo()

    account = await auth_service.signup("second@example.com", "secret1")
    assert account.email == "second@example.com"
