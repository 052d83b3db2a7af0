# pinboard/account/routes/__init__.py
from pinboard.utils.autoload import import_routes

__all__ = import_routes(__name__, __path__)
