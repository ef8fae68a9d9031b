"""
Database initialization script.
"""
from fintrack.core.config import Settings
from fintrack.db.session import build_engine, init_db

if __name__ == "__main__":
    settings = Settings()
    print("Initializing database...")
    engine = build_engine(settings)
    init_db(engine)
    engine.dispose()
    print("Database initialized successfully!")
