"""
SQLAlchemy database connection and session management.

This module provides:
- Database engine configuration (SQLite by default, any SQLAlchemy URL via env)
- Session factory for dependency injection
- Connection utilities

Usage:
     from database import get_session, engine

     # In FastAPI routes:
     @app.get("/items")
     def get_items(db: Session = Depends(get_session)):
          return db.query(Item).all()
     """
import logging
import os
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Database configuration from environment
DATABASE_URL = os.getenv("LEDGER_DATABASE_URL", "sqlite:///./payment_ledger.db")


def build_engine(url: str = DATABASE_URL, **kwargs) -> Engine:
     """
     Create an engine for the given URL.

     SQLite needs check_same_thread disabled because FastAPI runs sync
     routes in a threadpool; other backends get a sized QueuePool.
     """
     options = {
          "echo": os.getenv("SQL_ECHO", "false").lower() == "true",  # Log SQL if SQL_ECHO=true
     }
     if url.startswith("sqlite"):
          options["connect_args"] = {"check_same_thread": False}
     else:
          options.update(
               pool_size=5,
               max_overflow=10,
               pool_timeout=30,
               pool_recycle=1800,  # Recycle connections after 30 minutes
          )
     options.update(kwargs)
     return create_engine(url, **options)


# Create SQLAlchemy engine
engine = build_engine()

# Session factory
SessionLocal = sessionmaker(
     bind=engine,
     autocommit=False,
     autoflush=False,
     expire_on_commit=False,
)


def get_session() -> Generator[Session, None, None]:
     """
     FastAPI dependency that provides a database session.

     Usage:
          @app.get("/items")
          def get_items(db: Session = Depends(get_session)):
               return db.query(Item).all()

     Yields:
          Session: SQLAlchemy database session
     """
     session = SessionLocal()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


def init_db(bind: Engine = None) -> None:
     """
     Initialize database tables.

     Creates all tables defined in the models if they don't exist.
     For production, use Alembic migrations instead.
     """
     from models import Base
     Base.metadata.create_all(bind=bind or engine)


def check_connection(bind: Engine = None) -> bool:
     """
     Test database connectivity.

     Returns:
          bool: True if connection successful, False otherwise
     """
     try:
          with (bind or engine).connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except SQLAlchemyError as e:
          logger.error("Database connection failed: %s", e)
          return False
