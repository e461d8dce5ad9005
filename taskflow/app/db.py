from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()

_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


def build_engine(database_url: str) -> Engine:
    # SQLite requires check_same_thread=False for usage across threads
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    if database_url in _MEMORY_URLS:
        # One shared connection, otherwise every pooled connection sees an empty database
        return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(database_url, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
