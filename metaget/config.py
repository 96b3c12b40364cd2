from dataclasses import dataclass


# HTML5 tree construction: title and textarea hold raw text, not elements.
DEFAULT_PARSER = "html5lib"


@dataclass(frozen=True)
class ExtractorConfig:
    request_timeout: float = 15.0
    connect_timeout: float = 5.0
    max_connections: int = 16
    max_redirects: int = 10
    parser: str = DEFAULT_PARSER
