from dataclasses import dataclass
from typing import Any, Optional, Protocol


@dataclass(frozen=True)
class MetaTag:
    name: str
    content: str


class ResponseProtocol(Protocol):
    status: int

    def read(self, amt: Optional[int] = None) -> bytes: ...

    def release_conn(self) -> None: ...


class TransportProtocol(Protocol):
    def request(self, method: str, url: str, **kwargs: Any) -> ResponseProtocol: ...
