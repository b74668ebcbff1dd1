from collections.abc import Callable
from datetime import date

CodingPath = tuple[str, ...]
QueryPair = tuple[str, str | None]

DateFormatter = Callable[[date], str]
KeyFormatter = Callable[[CodingPath], str]
