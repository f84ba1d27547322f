import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """UnitOfWork with every repository mocked; tests set return values"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.set_statement_timeout = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock()

    uow.farms = MagicMock()
    uow.farms.get_by_id = AsyncMock()
    uow.farms.create = AsyncMock(side_effect=lambda f: f)

    uow.memberships = MagicMock()
    uow.memberships.get_by_user_and_farm = AsyncMock()
    uow.memberships.get_by_farm_id = AsyncMock(return_value=[])
    uow.memberships.create = AsyncMock(side_effect=lambda m: m)
    uow.memberships.update = AsyncMock(side_effect=lambda m: m)

    uow.parties = MagicMock()
    uow.parties.create = AsyncMock(side_effect=lambda p: p)
    uow.parties.get_by_id = AsyncMock()

    uow.party_roles = MagicMock()
    uow.party_roles.get_by_party_and_farm = AsyncMock(return_value=[])
    uow.party_roles.get_by_parties_in_farm = AsyncMock(return_value=[])
    uow.party_roles.get_by_party = AsyncMock(return_value=[])
    uow.party_roles.create = AsyncMock(side_effect=lambda r: r)
    uow.party_roles.delete = AsyncMock()

    uow.email_claims = MagicMock()
    uow.email_claims.find_holders = AsyncMock(return_value=[])
    uow.email_claims.claim = AsyncMock(return_value=[])
    uow.email_claims.release = AsyncMock()

    uow.party_contacts = MagicMock()
    uow.party_contacts.get_by_id = AsyncMock()
    uow.party_contacts.get_by_party_ids = AsyncMock(return_value=[])
    uow.party_contacts.get_primary = AsyncMock(return_value=None)
    uow.party_contacts.create = AsyncMock(side_effect=lambda c: c)
    uow.party_contacts.mark_primary = AsyncMock()

    uow.catalog_items = MagicMock()
    uow.catalog_items.get_by_ids_in_farm = AsyncMock(return_value=[])

    uow.orders = MagicMock()
    uow.orders.create = AsyncMock(side_effect=lambda o: o)
    uow.orders.update = AsyncMock(side_effect=lambda o: o)
    uow.orders.get_in_farm = AsyncMock()
    uow.orders.count_by_counterparty = AsyncMock(return_value=0)

    uow.order_items = MagicMock()
    uow.order_items.create_many = AsyncMock(side_effect=lambda items: items)
    uow.order_items.delete_by_order = AsyncMock()

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()

    return uow
