"""Action script capabilities and how they are obtained.

An action script is any object exposing `invoke(params, context)` and
optionally `error(params, context)` and `halt(params, context)`. These may be
coroutine functions or plain callables.
"""

import importlib.util
import logging
import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

from .errors import MalformedScript

logger = logging.getLogger(__name__)

Capability = Callable[[dict, dict], Any]


@dataclass(frozen=True)
class ActionScript:
    """The capability set of an action: invoke plus optional error/halt."""
    invoke: Capability
    error: Optional[Capability] = None
    halt: Optional[Capability] = None

    @classmethod
    def from_object(cls, obj: Any) -> "ActionScript":
        """Look up capabilities on a module, object or mapping.

        Raises:
            MalformedScript: If there is no callable invoke.
        """
        if isinstance(obj, ActionScript):
            return obj

        def lookup(name: str) -> Optional[Capability]:
            if isinstance(obj, Mapping):
                value = obj.get(name)
            else:
                value = getattr(obj, name, None)
            return value if callable(value) else None

        invoke = lookup("invoke")
        if invoke is None:
            raise MalformedScript(
                f"Action script {obj!r} must expose an 'invoke' capability"
            )
        return cls(invoke=invoke, error=lookup("error"), halt=lookup("halt"))


class ScriptSource:
    """Where the action script comes from: a file path or an object.

    A path is imported on first use and cached; an object is used as is.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        instance: Optional[ActionScript] = None,
    ):
        if (path is None) == (instance is None):
            raise ValueError("ScriptSource needs exactly one of path or instance")
        self.path = path
        self._script = instance

    @classmethod
    def from_argument(
        cls, script: Union[str, os.PathLike, Any], base_dir: Path
    ) -> "ScriptSource":
        """Build a source from a path-like reference or a script object."""
        if isinstance(script, (str, os.PathLike)):
            return cls(path=(Path(base_dir) / script).resolve())
        return cls(instance=ActionScript.from_object(script))

    @property
    def is_loaded(self) -> bool:
        return self._script is not None

    def load(self) -> ActionScript:
        """Return the script, importing it from path on first call."""
        if self._script is None:
            self._script = ActionScript.from_object(load_module(self.path))
        return self._script


def load_module(path: Path) -> Any:
    """Import a Python file as a module under a name unique to its path.

    Raises:
        MalformedScript: If the file doesn't exist or can't be imported.
    """
    if not path.is_file():
        raise MalformedScript(f"Action script not found: {path}")

    module_name = "_action_script_" + re.sub(r"\W", "_", str(path))
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise MalformedScript(f"Action script can't be imported: {path}")

    module = importlib.util.module_from_spec(spec)
    # Visible in sys.modules and sys.path while the body runs
    sys.modules[module_name] = module
    script_dir = str(path.parent)
    sys.path.insert(0, script_dir)
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    finally:
        sys.path.remove(script_dir)
    logger.debug("Loaded action script %s", path)
    return module
