import logging

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from projectcode import crud
from projectcode.core.config import settings

logger = logging.getLogger(__name__)


def _build_engine(url: str) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


engine = _build_engine(settings.SQLALCHEMY_DATABASE_URI)


def init_db(session: Session) -> None:
    # Tables are created directly from the SQLModel metadata; there is no
    # migration history for this store.
    SQLModel.metadata.create_all(session.get_bind())
    pricing = crud.get_pricing_configs(session=session)
    logger.info("Database ready with %s pricing plan(s)", len(pricing))
