from .handles import RemoteHandle
from .msgpack_converter import MsgpackConverter
from .yaml_converter import YamlConverter

__all__ = ["MsgpackConverter", "YamlConverter", "RemoteHandle"]
