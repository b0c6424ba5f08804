from __future__ import annotations


class ClubF4Error(Exception):
    """Base class for every recoverable failure in the scoreboard."""

    default_message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class PersistenceReadError(ClubF4Error):
    default_message = "Saved rounds could not be read."


class ImportParseError(ClubF4Error):
    default_message = "파일을 읽는 중 오류가 발생했습니다."


class ImportFormatError(ClubF4Error):
    default_message = "유효한 데이터 형식이 아닙니다."


class ImportSchemaError(ImportFormatError):
    def __init__(self, index: int, reason: str) -> None:
        super().__init__(f"유효한 데이터 형식이 아닙니다. (round #{index + 1}: {reason})")
        self.index = index
        self.reason = reason


class FormValidationError(ClubF4Error):
    default_message = "모든 필드를 올바르게 입력해주세요."


class CommentaryFetchError(ClubF4Error):
    default_message = "Commentary could not be generated."


class RoundNotFoundError(ClubF4Error):
    def __init__(self, round_id: str) -> None:
        super().__init__(f"Round '{round_id}' does not exist.")
        self.round_id = round_id
