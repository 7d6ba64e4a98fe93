import logging
from flask import current_app, has_app_context

__all__ = ['MongoBase']


class MongoBase:
    '''
    Thin wrapper around a mongoengine document. Unknown attributes are
    delegated to the wrapped document (`self.obj`).
    '''
    qs_filter = {}

    def __init_subclass__(cls, engine, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.engine = engine

    def __new__(cls, pk, *args, **kwargs):
        new = super().__new__(cls)
        # got a engine instance
        if isinstance(pk, new.engine):
            pk = pk.pk
        try:
            new.obj = new.engine.objects(pk=pk, **cls.qs_filter).first()
        except cls._invalid_pk_errors():
            new.obj = None
        return new

    @staticmethod
    def _invalid_pk_errors():
        from .engine import ValidationError
        return (ValidationError, )

    def __getattr__(self, name):
        obj = self.__dict__.get('obj')
        if obj is None:
            raise AttributeError(
                f'{type(self).__name__} has no attribute {name!r}')
        return getattr(obj, name)

    def __setattr__(self, name, value):
        if name == 'obj' or self.__dict__.get('obj') is None:
            super().__setattr__(name, value)
        else:
            setattr(self.obj, name, value)

    def __eq__(self, other):
        if isinstance(other, MongoBase):
            other = other.obj
        return self.obj is not None and self.obj == other

    def __hash__(self):
        return hash((type(self).__name__, self.obj.pk if self else None))

    def __bool__(self):
        return self.obj is not None

    def __repr__(self):
        return f'{type(self).__name__}({self.pk if self else None!r})'

    @property
    def logger(self) -> logging.Logger:
        if has_app_context():
            return current_app.logger
        return logging.getLogger(type(self).__module__)
