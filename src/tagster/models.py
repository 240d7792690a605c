from sqlalchemy import create_engine, event, func, Column, Integer, String, Table, ForeignKey, DateTime
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

Base = declarative_base()

# Association table for many-to-many relationship between files and tags
file_tags = Table(
    'file_tags',
    Base.metadata,
    Column('file_id', Integer, ForeignKey('files.id', ondelete='CASCADE'), primary_key=True),
    Column('tag_id', Integer, ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True)
)

class FileRecord(Base):
    __tablename__ = 'files'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True)
    added = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    path = Column(String, nullable=False, unique=True)
    tags = relationship('TagRecord', secondary=file_tags, back_populates='files',
                        passive_deletes=True)

class TagRecord(Base):
    __tablename__ = 'tags'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True)
    created = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    name = Column(String, nullable=False, unique=True)
    colour = Column(String, nullable=True)
    files = relationship('FileRecord', secondary=file_tags, back_populates='tags',
                         passive_deletes=True)

def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

def init_db(database_file, create=True):
    """Open a session on the SQLite database at `database_file`.

    With `create` the schema is applied first; existing tables are left alone.
    """
    engine = create_engine(f'sqlite:///{database_file}')
    event.listen(engine, 'connect', _enable_foreign_keys)
    if create:
        Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)()
