import pytest
import pytest_asyncio
from types import SimpleNamespace
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from chatbot_blocks.database.database import Base
from chatbot_blocks.models import Role, Tag, User
from chatbot_blocks.repositories.block_repository import BlockRepository
from chatbot_blocks.repositories.block_type_repository import BlockTypeRepository
from chatbot_blocks.repositories.chatbot_repository import ChatbotRepository
from chatbot_blocks.repositories.tag_repository import TagRepository
from chatbot_blocks.services.block_type_service import BlockTypeService
from chatbot_blocks.services.chatbot_service import ChatbotService
from chatbot_blocks.services.dynamic_block_service import DynamicBlockService
from chatbot_blocks.services.item_tag_service import ItemTagService
from chatbot_blocks.services.static_block_service import StaticBlockService
from chatbot_blocks.services.tag_service import TagService

OWNER_ID = 1
OTHER_ID = 2
ADMIN_ROLE_ID = 1
USER_ROLE_ID = 2

CATALOG_TAGS = ["CONTACT", "PHONE", "ADDRESS", "HOURS", "SCHEDULE"]


def seed_accounts():
    """Owner is an admin, the other account a plain user."""
    return [
        Role(id=ADMIN_ROLE_ID, name="ADMIN"),
        Role(id=USER_ROLE_ID, name="USER"),
        User(id=OWNER_ID, email="owner@example.com", role_id=ADMIN_ROLE_ID, password_hash="not-used"),
        User(id=OTHER_ID, email="other@example.com", role_id=USER_ROLE_ID, password_hash="not-used"),
    ]


@pytest_asyncio.fixture
async def engine():
    # One shared in-memory database per test
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        session.add_all(seed_accounts())
        await session.commit()
        yield session


@pytest_asyncio.fixture
async def catalog(db):
    """Seed the system tags that new blocks are linked to."""
    db.add_all([Tag(name=name, category="SYSTEM", is_custom=False) for name in CATALOG_TAGS])
    await db.commit()
    return CATALOG_TAGS


@pytest.fixture
def services(db):
    blocks = BlockRepository(db)
    block_types = BlockTypeRepository(db)
    chatbots = ChatbotService(ChatbotRepository(db), blocks, block_types)
    tags = TagService(TagRepository(db))
    return SimpleNamespace(
        blocks_repo=blocks,
        block_types_repo=block_types,
        chatbots=chatbots,
        tags=tags,
        blocks=StaticBlockService(chatbots, blocks, tags),
        block_types=BlockTypeService(chatbots, block_types),
        dynamic=DynamicBlockService(chatbots, block_types, blocks, tags),
        item_tags=ItemTagService(chatbots, blocks, tags),
    )
