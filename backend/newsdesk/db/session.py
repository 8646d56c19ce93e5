import logging
import unicodedata

from sqlalchemy import create_engine, event, text, String
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool
from sqlalchemy.sql.functions import FunctionElement

from newsdesk.core.config import settings
from newsdesk.db.base_class import Base

logger = logging.getLogger(__name__)


def fold_text(value):
    """
    Accent- and case-insensitive form of a string.

    "Thời Sự" and "thoi su" fold to the same value. Vietnamese "đ" has no
    decomposition, so it is mapped by hand.
    """
    if value is None:
        return None
    decomposed = unicodedata.normalize("NFKD", value.replace("đ", "d").replace("Đ", "D"))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


class fold(FunctionElement):
    """SQL counterpart of fold_text()"""
    type = String()
    name = "fold"
    inherit_cache = True


@compiles(fold)
def _compile_fold(element, compiler, **kw):
    return "newsdesk_fold(%s)" % compiler.process(element.clauses, **kw)


@compiles(fold, "postgresql")
def _compile_fold_postgresql(element, compiler, **kw):
    return "lower(unaccent(%s))" % compiler.process(element.clauses, **kw)


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        return kwargs

    return {
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": 60,
        "pool_recycle": 600,
        "pool_pre_ping": True,
        "poolclass": QueuePool,
        "connect_args": {
            "connect_timeout": 10,
            "keepalives": 1,
            "keepalives_idle": 30,
            "keepalives_interval": 10,
            "keepalives_count": 5,
        },
    }


engine = create_engine(settings.DATABASE_URL, echo=False, **_engine_kwargs(settings.DATABASE_URL))


if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _register_sqlite_functions(dbapi_connection, connection_record):
        dbapi_connection.create_function("newsdesk_fold", 1, fold_text, deterministic=True)
        dbapi_connection.execute("PRAGMA foreign_keys=ON")


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create every table known to the models"""
    # register models on Base.metadata
    import newsdesk.models  # noqa: F401

    if engine.dialect.name == "postgresql":
        with engine.begin() as conn:
            conn.execute(text("CREATE EXTENSION IF NOT EXISTS unaccent"))

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
