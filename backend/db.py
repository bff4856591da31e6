from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from config import get_settings

DATABASE_URL = get_settings().database_url
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

#create the SQLAlchemy engine
engine = create_engine(DATABASE_URL, connect_args=connect_args)

#create a configured " Session" class will be used to interact with database
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
#autoflush disables autoflushing of changes to the db before queries are executed.

#Base class for our models
Base = declarative_base()
#dependency to get db session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
