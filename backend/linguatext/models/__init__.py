from linguatext.models.user import (
    User,
    TelegramAuthRequest,
    TelegramAuthResponse,
    UserResponse,
    UserUpdate,
)
from linguatext.models.vocabulary import (
    Vocabulary,
    VocabularyCreate,
    VocabularyUpdate,
    VocabularyRead,
    ReviewRequest,
    ReviewResponse,
)
from linguatext.models.pronunciation import EvaluateRequest, EvaluateResponse, SttResponse

__all__ = [
    "User",
    "TelegramAuthRequest",
    "TelegramAuthResponse",
    "UserResponse",
    "UserUpdate",
    "Vocabulary",
    "VocabularyCreate",
    "VocabularyUpdate",
    "VocabularyRead",
    "ReviewRequest",
    "ReviewResponse",
    "EvaluateRequest",
    "EvaluateResponse",
    "SttResponse",
]
