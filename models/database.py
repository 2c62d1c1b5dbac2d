from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storage/app.db")

# Instalação single-tenant: todas as linhas pertencem a este household
HOUSEHOLD_ID = os.getenv("HOUSEHOLD_ID", "default_household")

# SQLite precisa check_same_thread=False
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in DATABASE_URL else {},
    echo=False
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency para FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Cria as tabelas (importa os modelos para registrá-los no metadata)"""
    import models  # noqa: F401
    Base.metadata.create_all(bind=engine)
