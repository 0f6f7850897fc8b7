from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from destaque_sheq.config import settings

engine_kwargs = {
    "pool_pre_ping": True,  # Verifica conexões antes de usar
    "echo": True if settings.ENVIRONMENT == "development" else False  # Log SQL em dev
}

# SQLite (testes/desenvolvimento local) precisa compartilhar a conexão entre threads
if settings.DATABASE_URL.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    if settings.DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        engine_kwargs["poolclass"] = StaticPool

# Engine do SQLAlchemy
engine = create_engine(settings.DATABASE_URL, **engine_kwargs)

if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _ativar_foreign_keys(dbapi_connection, connection_record):
        # SQLite só aplica ON DELETE CASCADE/SET NULL com foreign_keys ligado
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base para os models
Base = declarative_base()


def get_db():
    """
    Dependency para obter sessão do banco de dados
    Usado no FastAPI Depends
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
