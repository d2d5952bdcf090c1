import inspect as _inspect
from functools import wraps

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from devconnector.core.exceptions import StoreFailure


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def store_operation(fn):
        """Roll back and re-raise store errors as :class:`StoreFailure`."""
        if _inspect.iscoroutinefunction(fn):
            raise TypeError("@store_operation decorates synchronous repository methods")

        @wraps(fn)
        def _wrap(self, *args, **kwargs):
            try:
                return fn(self, *args, **kwargs)
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Store error in {type(self).__name__}.{fn.__name__}: {str(e)}")
                raise StoreFailure(str(e)) from e

        return _wrap
