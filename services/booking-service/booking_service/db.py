from booking_core.database import Base, get_engine, get_session

from .config import DATABASE_URL, DATABASE_ISOLATION

engine = get_engine(DATABASE_URL, isolation_level=DATABASE_ISOLATION)
SessionLocal = get_session(engine)

__all__ = ["Base", "engine", "SessionLocal"]
