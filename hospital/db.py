from sqlmodel import SQLModel, create_engine, Session
from hospital import config


connect_args = {"check_same_thread": False} if config.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(config.DATABASE_URL, echo=False, connect_args=connect_args)


def init_db():
    # Register every table on the metadata before creating them
    import hospital.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    return Session(engine)
