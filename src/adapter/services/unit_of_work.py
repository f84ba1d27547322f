from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.catalog_item_repository import CatalogItemRepository
from src.adapter.repositories.email_claim_repository import EmailClaimRepository
from src.adapter.repositories.farm_repository import FarmRepository
from src.adapter.repositories.membership_repository import MembershipRepository
from src.adapter.repositories.order_item_repository import OrderItemRepository
from src.adapter.repositories.order_repository import OrderRepository
from src.adapter.repositories.party_contact_repository import PartyContactRepository
from src.adapter.repositories.party_repository import PartyRepository
from src.adapter.repositories.party_role_repository import PartyRoleRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.farms = FarmRepository(self.session)
        self.memberships = MembershipRepository(self.session)
        self.parties = PartyRepository(self.session)
        self.party_roles = PartyRoleRepository(self.session)
        self.party_contacts = PartyContactRepository(self.session)
        self.email_claims = EmailClaimRepository(self.session)
        self.catalog_items = CatalogItemRepository(self.session)
        self.orders = OrderRepository(self.session)
        self.order_items = OrderItemRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

    async def set_statement_timeout(self, seconds: float):
        # SQLite has no statement timeout; callers also hold an asyncio deadline
        if self.session.get_bind().dialect.name != "postgresql":
            return
        milliseconds = max(1, int(seconds * 1000))
        await self.session.execute(text(f"SET LOCAL statement_timeout = {milliseconds}"))
