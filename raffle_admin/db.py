"""SQLAlchemy engine + session management.

Uses a session-per-request pattern. The engine and session factory live in
``app.extensions``; services receive the session as an explicit argument.
"""

from __future__ import annotations

from flask import Flask, g
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from raffle_admin.models.base import Base


def _enable_sqlite_pragmas(engine: Engine) -> None:
    """Turn on FK enforcement and take the write lock when a transaction begins.

    pysqlite's own transaction handling is disabled so that ``BEGIN IMMEDIATE``
    can be emitted; concurrent writers are serialized by SQLite itself.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:  # type: ignore[no-untyped-def]
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_app_engine(database_url: str) -> Engine:
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        kwargs: dict[str, object] = {"connect_args": {"check_same_thread": False}}
        if not url.database or url.database == ":memory:":
            # In-memory databases only exist for the lifetime of one connection.
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, **kwargs)
        _enable_sqlite_pragmas(engine)
        return engine

    return create_engine(database_url, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(app: Flask) -> None:
    """Initialize database engine and per-request sessions."""

    engine = create_app_engine(str(app.config["DATABASE_URL"]))
    session_factory = create_session_factory(engine)

    # Create tables (production would use migrations).
    Base.metadata.create_all(bind=engine)

    app.extensions["engine"] = engine
    app.extensions["session_factory"] = session_factory

    @app.before_request
    def _open_session() -> None:
        g.db = session_factory()  # type: ignore[attr-defined]

    @app.teardown_request
    def _close_session(exc: BaseException | None) -> None:
        session: Session | None = g.pop("db", None)
        if session is None:
            return

        try:
            if exc is None:
                session.commit()
            else:
                session.rollback()
        finally:
            session.close()


def close_db(app: Flask) -> None:
    """Dispose the engine created by :func:`init_db`."""

    engine: Engine | None = app.extensions.pop("engine", None)
    app.extensions.pop("session_factory", None)
    if engine is not None:
        engine.dispose()


def get_session() -> Session:
    """Get the current request's SQLAlchemy session."""

    session: Session | None = getattr(g, "db", None)
    if session is None:
        raise RuntimeError("Database session not initialized")
    return session


def rollback_request_session() -> None:
    """Discard pending work of the current request, if a session is open.

    Error handlers call this so a handled error never reaches the commit in
    ``teardown_request`` with partial changes.
    """

    session: Session | None = getattr(g, "db", None)
    if session is not None:
        session.rollback()
