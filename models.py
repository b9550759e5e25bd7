from sqlalchemy import Column, DateTime, String, Text, TypeDecorator, func
from sqlalchemy.orm import declarative_base
import json

Base = declarative_base()


class JSONType(TypeDecorator):
    """Custom JSON type that works reliably with SQLite."""
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return json.loads(value)


class StoredValue(Base):
    """One entry of the durable client key-value store (e.g. the auth token).

    Rows are scoped to one browser so sessions never leak between visitors.
    """
    __tablename__ = "browser_state"
    scope = Column(String, primary_key=True)
    key = Column(String, primary_key=True)
    value = Column(JSONType)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
