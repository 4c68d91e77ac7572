import importlib
import logging
import os
import sys
from dataclasses import dataclass
from types import ModuleType
from typing import Dict, List, Optional, Any

from cwtbackends.builtins import BUILTIN_BACKENDS

log = logging.getLogger("BackendManager")


@dataclass
class BackendInfo:
    id: str
    meta: dict
    module: ModuleType
    backend_obj: Any


class BackendManager:
    """
    Loads transform backends from:
      - cwtbackends.builtins.*
      - <project_root>/plugins/backends/*.py
    """
    def __init__(self, project_root: Optional[str] = None):
        self.project_root = project_root
        self.backends: Dict[str, BackendInfo] = {}

        if self.project_root and self.project_root not in sys.path:
            sys.path.insert(0, self.project_root)

    def reload_all(self):
        self.backends.clear()
        self._load_builtin_backends()
        self._load_external_backends()

    def _load_builtin_backends(self):
        for pid, modname in BUILTIN_BACKENDS.items():
            self._load_backend_module(modname, backend_id=pid)

    def _load_external_backends(self):
        if not self.project_root:
            return
        folder = os.path.join(self.project_root, "plugins", "backends")
        if not os.path.isdir(folder):
            return
        for fn in sorted(os.listdir(folder)):
            if not fn.endswith(".py") or fn.startswith("_"):
                continue
            modname = f"plugins.backends.{fn[:-3]}"
            self._load_backend_module(modname, backend_id=f"plugin:{modname}")

    def _load_backend_module(self, modname: str, backend_id: str):
        try:
            if modname in sys.modules:
                mod = importlib.reload(sys.modules[modname])
            else:
                mod = importlib.import_module(modname)

            backend_cls = getattr(mod, "TransformBackend", None)
            meta = getattr(mod, "BACKEND_META", None)
            if backend_cls is None or meta is None:
                raise ValueError("Backend module must define BACKEND_META and TransformBackend class")

            obj = backend_cls()
            pid = meta.get("id", backend_id)
            self.backends[pid] = BackendInfo(id=pid, meta=meta, module=mod, backend_obj=obj)
            log.info("Loaded transform backend: %s (%s)", meta.get("name"), pid)
        except Exception as e:
            log.exception("Failed to load transform backend %s: %s", modname, e)

    def list_backends(self) -> List[BackendInfo]:
        return list(self.backends.values())

    def get_backend(self, backend_id: str) -> Optional[BackendInfo]:
        return self.backends.get(backend_id)
