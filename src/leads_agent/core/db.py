"""Factory de sessão do SQLAlchemy 2."""
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

def _serialize_sqlite_writers(engine) -> None:
    """SQLite: transações começam com BEGIN IMMEDIATE para serializar escritores."""

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

def create_session_factory(database_url: str):
    """Cria SessionFactory síncrona para SQLAlchemy 2.

    :param database_url: URL completa do banco (MySQL em produção, SQLite em dev/testes).
    :return: sessionmaker configurado.
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False, "timeout": 30})
        _serialize_sqlite_writers(engine)
    else:
        engine = create_engine(database_url, pool_pre_ping=True, pool_recycle=3600)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
