class MetaGetError(Exception):
    """Base class for every failure raised while extracting meta tags."""


class InvalidURL(MetaGetError):
    def __init__(self, url: str) -> None:
        super().__init__(f"invalid URL scheme: {url}")
        self.url = url


class FetchFailed(MetaGetError):
    def __init__(self, url: str, cause: BaseException) -> None:
        super().__init__(f"failed to fetch URL {url}: {cause}")
        self.url = url
        self.cause = cause


class UnexpectedStatus(MetaGetError):
    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"unexpected status code: {status_code}")
        self.url = url
        self.status_code = status_code


class ParseFailed(MetaGetError):
    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"failed to parse HTML: {cause}")
        self.cause = cause
