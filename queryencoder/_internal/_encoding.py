from typing import Any


class ExtraUnicodeDecodeError(UnicodeDecodeError):
    def __init__(self, obj: Any, *args: Any) -> None:
        self.obj = obj
        super().__init__(*args)

    def __str__(self) -> str:
        return f"{super().__str__()}. You passed in {self.obj!r} ({type(self.obj)})"


def force_str(s: Any, encoding: str = "utf-8", errors: str = "strict") -> str:
    """
    Returns a `str` for `s`, decoding bytes with the given encoding and
    falling back to `str()` for anything else.
    """
    # Handle the common case first for performance reasons.
    if issubclass(type(s), str):
        return s
    try:
        if isinstance(s, (bytes, bytearray, memoryview)):
            s = str(bytes(s), encoding, errors)
        else:
            s = str(s)
    except UnicodeDecodeError as e:
        raise ExtraUnicodeDecodeError(s, *e.args) from e
    return s
