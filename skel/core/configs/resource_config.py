"""Configuration for the resource manager."""

from pathlib import PurePosixPath

from pydantic import Field

from skel.core.loggings import LogConfig
from skel.core.utils.yaml_model import YamlModel


class ResourceManagerConfig(YamlModel):
    """Where component resources live and how they are named.

    A component `name` of kind `type` is laid out as::

        {components_root_dir}/{type}/{name}/{name}.html
        {components_root_dir}/{type}/{name}/{name}.css
        {components_root_dir}/{type}/{name}/{name}.py

    Paths are relative to `base_dir`, which the file transport resolves.

    Example:
        config = ResourceManagerConfig.from_yaml_file("skel.yaml")
        config.markup_path("widgets", "card")
        # 'web-components/widgets/card/card.html'
    """

    base_dir: str = "."
    components_root_dir: str = "web-components"
    markup_extension: str = ".html"
    style_extension: str = ".css"
    module_extension: str = ".py"
    log: LogConfig = Field(default_factory=LogConfig)

    def component_dir(self, component_type: str, name: str) -> str:
        return str(PurePosixPath(self.components_root_dir, component_type, name))

    def _path(self, component_type: str, name: str, extension: str) -> str:
        return str(PurePosixPath(self.component_dir(component_type, name), f"{name}{extension}"))

    def markup_path(self, component_type: str, name: str) -> str:
        return self._path(component_type, name, self.markup_extension)

    def style_path(self, component_type: str, name: str) -> str:
        return self._path(component_type, name, self.style_extension)

    def module_path(self, component_type: str, name: str) -> str:
        return self._path(component_type, name, self.module_extension)
