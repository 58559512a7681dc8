"""
YAML Encoder

Renders a decoded API description as block-style YAML. Mapping keys
are sorted so the same input always gives the same text, and no
anchors or aliases are emitted. Editor handles are written with local
tags (``!Buffer 1``) that ``YamlConverter.load`` understands.
"""

import yaml

from ..errors import EncodeError
from .depth import MAX_DEPTH, document_depth, recursion_headroom
from .handles import EXT_TYPES, RemoteHandle


class ApiInfoDumper(yaml.SafeDumper):
    """SafeDumper that never emits anchors and knows about editor handles."""

    def ignore_aliases(self, data):
        return True


class ApiInfoLoader(yaml.SafeLoader):
    """SafeLoader that turns ``!Buffer``/``!Window``/``!Tabpage`` back into handles."""
    pass


# Characters PyYAML writes raw in plain and single-quoted scalars but folds on load
FOLDED_CHARACTERS = ("\x85", "\u2028", "\u2029", "\ufeff")


def _represent_str(dumper, data):
    if any(ch in data for ch in FOLDED_CHARACTERS):
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style='"')
    return dumper.represent_str(data)


def _represent_handle(dumper, handle):
    return dumper.represent_scalar(f"!{handle.kind}", str(handle.handle))


def _handle_constructor(kind: str):
    def construct(loader, node):
        return RemoteHandle(kind, int(loader.construct_scalar(node)))
    return construct


ApiInfoDumper.add_representer(str, _represent_str)
ApiInfoDumper.add_representer(RemoteHandle, _represent_handle)
for _kind in EXT_TYPES.values():
    ApiInfoLoader.add_constructor(f"!{_kind}", _handle_constructor(_kind))


class YamlConverter:
    """Encodes structured documents to YAML text and reads them back."""

    @staticmethod
    def encode(document) -> str:
        """
        Serialize a structured document to YAML.

        Raises:
            EncodeError: If the document holds a value YAML cannot express,
                such as an unknown MessagePack extension type.
        """
        depth = document_depth(document)
        if depth > MAX_DEPTH:
            raise EncodeError(f"document nested too deeply ({depth} levels, limit {MAX_DEPTH})")

        try:
            with recursion_headroom(depth):
                return yaml.dump(
                    document,
                    Dumper=ApiInfoDumper,
                    default_flow_style=False,
                    allow_unicode=True,
                    sort_keys=True,
                )
        except RecursionError as e:
            raise EncodeError("document nested too deeply") from e
        except yaml.YAMLError as e:
            raise EncodeError(str(e)) from e
        except (TypeError, ValueError) as e:
            raise EncodeError(f"cannot represent value: {e}") from e

    @staticmethod
    def load(text: str):
        """Parse YAML produced by ``encode`` back into a structured document."""
        # Each nesting level adds at least one line or one "- " marker
        levels = text.count("\n") + text.count("- ")
        with recursion_headroom(levels):
            return yaml.load(text, Loader=ApiInfoLoader)
