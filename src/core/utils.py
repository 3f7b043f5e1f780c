import re

_MASTER_URL_RE = re.compile(r"/master/(\d+)")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_master_id(text: str | None) -> int | None:
    """
    Returns the master id from a Discogs master URL
    (https://www.discogs.com/master/12345-Artist-Title) or a bare id.
    """
    if not text:
        return None
    text = text.strip()
    m = _MASTER_URL_RE.search(text)
    if m:
        return int(m.group(1))
    if text.isdigit() and int(text) > 0:
        return int(text)
    return None


def parse_leading_int(value: str) -> int | None:
    """
    Integer prefix of a cell text, like JavaScript parseInt:
    "1999" -> 1999, "12 tracks" -> 12, "CD" -> None.
    """
    m = _LEADING_INT_RE.match(value or "")
    return int(m.group(1)) if m else None


def chunked(items: list, size: int) -> list[list]:
    return [items[i:i + size] for i in range(0, len(items), size)]
