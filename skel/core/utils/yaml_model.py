from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import BaseModel


class YamlModel(BaseModel):
    """Pydantic model that can be read from and written to a YAML file."""

    @classmethod
    def read_yaml(cls, file_path: Union[str, Path], encoding: str = "utf-8") -> Dict[str, Any]:
        """Read a YAML mapping from disk.

        Raises:
            FileNotFoundError: If the file does not exist
            yaml.YAMLError: If the file is malformed
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"YAML file not found: {file_path}")

        with open(file_path, "r", encoding=encoding) as file:
            try:
                content = yaml.safe_load(file)
            except yaml.YAMLError as e:
                raise yaml.YAMLError(f"Error parsing YAML file {file_path}: {e}")
        return content if content is not None else {}

    @classmethod
    def from_yaml_file(cls, file_path: Union[str, Path]) -> "YamlModel":
        """Build a model from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the content does not match the model schema
        """
        data = cls.read_yaml(file_path)
        try:
            return cls(**data)
        except Exception as e:
            raise ValueError(f"Error creating {cls.__name__} from {file_path}: {e}") from e

    def to_yaml_file(self, file_path: Union[str, Path], encoding: str = "utf-8") -> None:
        """Dump the model to a YAML file, creating parent directories."""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", encoding=encoding) as file:
            yaml.dump(self.model_dump(mode="json"), file, default_flow_style=False, sort_keys=False)

    def to_yaml_string(self) -> str:
        return yaml.dump(self.model_dump(mode="json"), default_flow_style=False, sort_keys=False)
