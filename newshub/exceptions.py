from typing import Optional, Dict, Any


class NewsHubError(Exception):
    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class SourceNotFoundError(NewsHubError):
    def __init__(self, source_id: str):
        super().__init__(
            message=f"Source not found: {source_id}",
            error_code="SOURCE_NOT_FOUND",
            details={"source_id": source_id}
        )
        self.source_id = source_id


class FetchError(NewsHubError):
    pass


class NetworkError(FetchError):
    pass


class ParsingError(FetchError):
    pass


class PersistenceError(NewsHubError):
    pass
