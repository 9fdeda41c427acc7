"""Models package; exposes the shared DBStorage instance as `models.storage`.

The engine is bound in api.create_app() from DATABASE_URL.
"""
from models.db_storage import DBStorage

storage = DBStorage()
