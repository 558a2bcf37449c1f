"""File system transport for component resources."""

import asyncio
import hashlib
import importlib.util
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, Mapping, Union

from skel.core.loggings import LOGGER, format_log_data

from .interfaces import ModuleLoader, ResourceReader


class FileResourceTransport(ResourceReader, ModuleLoader):
    """Reads markup/style text and behavior modules from a base directory.

    Blocking file access runs in a worker thread so the event loop keeps
    serving other loads. Loaded modules are cached by resolved path, like
    the import system does.

    Example:
        transport = FileResourceTransport("app")
        html = await transport.read_resource("web-components/widgets/card/card.html")
        exports = await transport.load_module("web-components/widgets/card/card.py")
        CardPresenter = exports["CardPresenter"]
    """

    def __init__(self, base_dir: Union[str, Path] = ".", encoding: str = "utf-8"):
        self._base_dir = Path(base_dir)
        self._encoding = encoding
        self._modules: Dict[Path, ModuleType] = {}

    def _resolve(self, path: str) -> Path:
        return (self._base_dir / path).resolve()

    async def read_resource(self, path: str) -> str:
        file_path = self._resolve(path)
        text = await asyncio.to_thread(file_path.read_text, encoding=self._encoding)
        LOGGER.debug("Read %s (%d chars)", format_log_data(str(file_path)), len(text))
        return text

    async def load_module(self, path: str) -> Mapping[str, Any]:
        file_path = self._resolve(path)
        module = self._modules.get(file_path)
        if module is None:
            module = await asyncio.to_thread(self._import_file, file_path)
            self._modules[file_path] = module
        return vars(module)

    @staticmethod
    def _import_file(file_path: Path) -> ModuleType:
        if not file_path.is_file():
            raise FileNotFoundError(f"Module file not found: {file_path}")

        # Unique name per path; components in different folders may share a file name
        digest = hashlib.md5(str(file_path).encode()).hexdigest()[:8]
        module_name = f"skel_component_{file_path.stem}_{digest}"

        spec = importlib.util.spec_from_file_location(module_name, file_path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load module from {file_path}")

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        LOGGER.debug("Loaded module %s", format_log_data(str(file_path)))
        return module
