"""
Failure taxonomy shared by every stage of a submission.

Each error carries a Turkish message suitable for display in the form.
"""

from __future__ import annotations

from typing import Optional


class PredictionError(Exception):
    """Base class for every classified submission failure."""

    def user_message(self) -> str:
        return f"Bir hata oluştu: {self}"


class RequestConstructionError(PredictionError):
    """The request could not be formed or serialized."""

    def user_message(self) -> str:
        return f"İstek oluşturulurken hata oluştu: {self}"


class UnreachableError(PredictionError):
    """The request was sent but no response was received."""

    def user_message(self) -> str:
        return "Sunucuya ulaşılamıyor. Lütfen internet bağlantınızı kontrol edin."


class TimedOutError(PredictionError):
    """The endpoint did not answer before the caller's deadline."""

    def __init__(self, timeout: Optional[float]):
        super().__init__(f"no response within {timeout} seconds")
        self.timeout = timeout

    def user_message(self) -> str:
        if self.timeout is None:
            return "Sunucu yanıt vermedi."
        return f"Sunucu {self.timeout:g} saniye içinde yanıt vermedi."


class ServerError(PredictionError):
    """The endpoint answered with a non-success status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(f"HTTP {status_code}: {message or 'unknown error'}")
        self.status_code = status_code
        self.message = message

    def user_message(self) -> str:
        return f"Sunucu hatası: {self.status_code} - {self.message or 'Bilinmeyen hata'}"


class MalformedResponseError(PredictionError):
    """The response body lacks the generated text."""

    def user_message(self) -> str:
        return "API'den geçerli bir yanıt alınamadı"


class PersistenceError(PredictionError):
    """The prediction history could not be read or written."""

    def user_message(self) -> str:
        return f"Tahmin geçmişi kaydedilemedi: {self}"
