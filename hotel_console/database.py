from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from hotel_console.config import settings

is_sqlite = settings.DATABASE_URL.startswith("sqlite")

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using
    echo=settings.DEBUG,  # Log SQL queries in debug mode
    # SQLite-specific settings; pool sizing only applies to server databases
    **(
        {"connect_args": {"check_same_thread": False}}
        if is_sqlite
        else {"pool_size": settings.DB_POOL_SIZE, "max_overflow": settings.DB_MAX_OVERFLOW}
    ),
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """
    FastAPI dependency for database sessions.

    Yields a database session and ensures it's closed after use.

    Usage:
        @app.get("/hotels")
        def list_hotels(db: Session = Depends(get_db)):
            return db.query(Hotel).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
