# pinboard/utils/autoload.py
import importlib
import pkgutil
from typing import Iterable, List


def import_routes(package: str, path: Iterable[str]) -> List[str]:
    """Import every module of a routes package so its @bp handlers register."""
    names = []
    for info in pkgutil.iter_modules(path):
        importlib.import_module(f"{package}.{info.name}")
        names.append(info.name)
    return names
