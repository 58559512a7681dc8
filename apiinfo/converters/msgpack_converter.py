"""
MessagePack Decoder

Turns the raw bytes printed by ``nvim --api-info`` into plain Python
values: dicts, lists, strings, numbers, booleans and None. Extension
types for editor objects become RemoteHandle values; any other
extension type is passed through untouched as ``msgpack.ExtType``.
"""

import msgpack

from ..errors import DecodeError
from .depth import MAX_DEPTH, document_depth, recursion_headroom
from .handles import EXT_TYPES, RemoteHandle


class MsgpackConverter:
    """Decodes MessagePack payloads into a structured document."""

    @staticmethod
    def decode(data: bytes):
        """
        Decode a single MessagePack object.

        Maps may use any hashable key, strings must be valid UTF-8, and
        the payload must hold exactly one object with no trailing bytes.
        Timestamps decode to timezone-aware UTC datetimes, which hold
        microseconds: any nanosecond remainder is truncated.

        Raises:
            DecodeError: If the bytes are truncated, malformed, nested more
                than MAX_DEPTH levels, or carry trailing data.
        """
        if not data:
            raise DecodeError("empty payload")

        try:
            with recursion_headroom(min(len(data), MAX_DEPTH)):
                document = msgpack.unpackb(
                    data,
                    raw=False,
                    use_list=True,
                    strict_map_key=False,
                    timestamp=3,
                    ext_hook=_ext_hook,
                )
        except msgpack.ExtraData as e:
            raise DecodeError(f"trailing data after object ({len(e.extra)} bytes)") from e
        except RecursionError as e:
            raise DecodeError("document nested too deeply") from e
        except (ValueError, TypeError, OverflowError, msgpack.UnpackException) as e:
            raise DecodeError(f"malformed payload: {e}") from e

        depth = document_depth(document)
        if depth > MAX_DEPTH:
            raise DecodeError(f"document nested too deeply ({depth} levels, limit {MAX_DEPTH})")
        return document

    @staticmethod
    def encode(value) -> bytes:
        """Pack a structured document back into MessagePack."""
        return msgpack.packb(value, use_bin_type=True, datetime=True, default=_pack_default)


def _ext_hook(code: int, data: bytes):
    kind = EXT_TYPES.get(code)
    if kind is None:
        return msgpack.ExtType(code, data)

    handle = msgpack.unpackb(data)
    if isinstance(handle, bool) or not isinstance(handle, int):
        raise ValueError(f"{kind} handle is not an integer: {handle!r}")
    return RemoteHandle(kind, handle)


def _pack_default(obj):
    if isinstance(obj, RemoteHandle):
        return msgpack.ExtType(obj.ext_code, msgpack.packb(obj.handle))
    raise TypeError(f"Cannot serialize {type(obj).__name__} as MessagePack")
