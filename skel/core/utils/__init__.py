from .yaml_model import YamlModel

__all__ = ["YamlModel"]
