from sqlalchemy import BigInteger, Column, DateTime, Integer
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

# BIGINT on PostgreSQL; plain INTEGER on SQLite so primary keys autoincrement in tests
BigIntegerType = BigInteger().with_variant(Integer(), "sqlite")


class CreatedAtMixin:
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class TimestampMixin(CreatedAtMixin):
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
