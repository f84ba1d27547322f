from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.catalog_item_repository import ICatalogItemRepository
from src.app.repositories.email_claim_repository import IEmailClaimRepository
from src.app.repositories.farm_repository import IFarmRepository
from src.app.repositories.membership_repository import IMembershipRepository
from src.app.repositories.order_item_repository import IOrderItemRepository
from src.app.repositories.order_repository import IOrderRepository
from src.app.repositories.party_contact_repository import IPartyContactRepository
from src.app.repositories.party_repository import IPartyRepository
from src.app.repositories.party_role_repository import IPartyRoleRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    farms: IFarmRepository
    memberships: IMembershipRepository
    parties: IPartyRepository
    party_roles: IPartyRoleRepository
    party_contacts: IPartyContactRepository
    email_claims: IEmailClaimRepository
    catalog_items: ICatalogItemRepository
    orders: IOrderRepository
    order_items: IOrderItemRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass

    @abstractmethod
    async def set_statement_timeout(self, seconds: float):
        """Bound every statement of the current transaction, where the store supports it"""
        pass
