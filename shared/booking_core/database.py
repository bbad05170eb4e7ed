from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

def get_engine(database_url: str, isolation_level: str | None = None):
    kwargs = {}
    if isolation_level:
        # e.g. SERIALIZABLE on Postgres so overlapping inserts cannot both commit
        kwargs["isolation_level"] = isolation_level
    return create_async_engine(database_url, echo=False, future=True, **kwargs)

Base = declarative_base()

def get_session(engine):
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False
    )
