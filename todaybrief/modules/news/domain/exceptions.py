"""News domain exceptions."""

from todaybrief.core.domain.exceptions import EntityNotFoundError, ValidationError


class NewsNotFoundError(EntityNotFoundError):
    """Raised when a referenced article does not exist."""

    def __init__(self, news_id: str):
        super().__init__("News", news_id)


class EmptyNewsBatchError(ValidationError):
    """Raised when no entry of a bulk submission survives cleaning."""

    def __init__(self) -> None:
        super().__init__("저장할 유효한 뉴스 항목이 없습니다.")
