from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy import MetaData, event
from sqlalchemy.orm import declarative_base, with_loader_criteria
from src.config import get_async_database_url
from src.orm_mixins import SoftDeleteMixin

# PostgreSQL naming conventions
POSTGRES_INDEXES_NAMING_CONVENTION = {
    "ix": "%(column_0_label)s_idx",
    "uq": "%(table_name)s_%(column_0_name)s_key",
    "ck": "%(table_name)s_%(constraint_name)s_check",
    "fk": "%(table_name)s_%(column_0_name)s_fkey",
    "pk": "%(table_name)s_pkey",
}

metadata = MetaData(naming_convention=POSTGRES_INDEXES_NAMING_CONVENTION)

database_url = get_async_database_url()

engine = create_async_engine(
    database_url,
    echo=False,
    future=True,
    connect_args={
        "server_settings": {
            "timezone": "UTC"
        }
    } if database_url.startswith("postgresql") else {}
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Create Base class with naming conventions
Base = declarative_base(metadata=metadata)


# Exclude soft-deleted rows on all ORM SELECTs
@event.listens_for(AsyncSession.sync_session_class, "do_orm_execute")
def _add_soft_delete_filter(execute_state):
    if not execute_state.is_select:
        return

    # Bypass via execution options:
    # - include_deleted=True: do not apply the global filter
    # - only_deleted=True: filter to only deleted rows
    opts = execute_state.local_execution_options or {}
    if opts.get("include_deleted"):
        return

    only_deleted = bool(opts.get("only_deleted"))
    predicate_factory = (lambda cls: cls.deleted_at.isnot(None)) if only_deleted else (lambda cls: cls.deleted_at.is_(None))

    execute_state.statement = execute_state.statement.options(
        with_loader_criteria(
            SoftDeleteMixin,
            predicate_factory,
            include_aliases=True,
        )
    )


# Dependency to get async database session
async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
