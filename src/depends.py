from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession


def create_session_factory(db_uri: str, **engine_kwargs):
    """Build an engine and an AsyncSession factory bound to it"""
    engine = create_async_engine(db_uri, echo=False, future=True, **engine_kwargs)
    session_factory = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    return engine, session_factory


async def get_session(request: Request) -> AsyncSession:
    async with request.app.state.session_factory() as session:
        yield session


def get_config(request: Request):
    return request.app.state.config
