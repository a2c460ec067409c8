"""Import resolution — turns ``"module:attribute"`` or ``"app.py:attr"`` into an object.

Shared by every ``routemap`` subcommand. The resolved object is handed to
the extractor as-is; app factories are invoked there, not here.
"""

import importlib
import importlib.util
import sys
from pathlib import Path
from typing import Any

from routemap.errors import AppResolutionError

DEFAULT_ATTRIBUTE = "app"


def _load_file(file_path: str) -> Any:
    path = Path(file_path).resolve()
    if not path.is_file():
        msg = f"No such file: {file_path!r}"
        raise AppResolutionError(msg)

    module_name = f"_routemap_target_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot import {file_path!r}"
        raise AppResolutionError(msg)

    module = importlib.util.module_from_spec(spec)
    # Let the target import its siblings
    sys.path.insert(0, str(path.parent))
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def resolve_app(import_string: str) -> Any:
    """Resolve an import string to the object it names.

    Accepts ``"module:attribute"`` or ``"path/to/file.py:attribute"``.
    When the attribute portion is omitted, defaults to ``"app"``.

    Raises:
        ImportError: If the module cannot be imported.
        AppResolutionError: If the file or attribute does not exist.
    """
    target, _, attr_name = import_string.partition(":")
    attr_name = attr_name or DEFAULT_ATTRIBUTE

    if target.endswith(".py"):
        module = _load_file(target)
    else:
        module = importlib.import_module(target)

    try:
        return getattr(module, attr_name)
    except AttributeError as exc:
        msg = f"{target!r} has no attribute {attr_name!r}"
        raise AppResolutionError(msg) from exc
