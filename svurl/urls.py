"""URL 解析：计算 origin（scheme+host+port）与 full path（origin + path）。"""
from typing import NamedTuple
from urllib.parse import urlsplit

from svurl.errors import InvalidURLError

# 这些 scheme 的默认端口不出现在 origin 中
DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}


class ParsedURL(NamedTuple):
    origin: str
    pathname: str

    @property
    def full_path(self) -> str:
        return self.origin + self.pathname


def parse_url(text: str) -> ParsedURL:
    """解析绝对 URL，失败时抛出 `InvalidURLError`。query 与 fragment 被丢弃。"""
    if not isinstance(text, str) or not text.strip():
        raise InvalidURLError(str(text), "empty")
    try:
        parts = urlsplit(text.strip())
        port = parts.port
    except ValueError as e:
        raise InvalidURLError(text, str(e)) from e

    scheme = parts.scheme.lower()
    host = parts.hostname
    if not scheme or not host:
        raise InvalidURLError(text, "not an absolute URL")

    if ":" in host:
        host = f"[{host}]"
    origin = f"{scheme}://{host}"
    if port is not None and DEFAULT_PORTS.get(scheme) != port:
        origin += f":{port}"

    pathname = parts.path
    if not pathname and scheme in DEFAULT_PORTS:
        pathname = "/"
    return ParsedURL(origin, pathname)
