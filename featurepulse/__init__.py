from featurepulse.api.client import FeaturePulseAPI
from featurepulse.api.errors import (
    AlreadyVotedError,
    DecodingError,
    FeaturePulseError,
    InvalidResponseError,
    InvalidURLError,
    MissingAPIKeyError,
    NetworkError,
    PaymentRequiredError,
    ServerError,
)
from featurepulse.config.sdk_config import SDKConfig
from featurepulse.models.feature_request import FeatureRequest, FeatureRequestStatus
from featurepulse.models.payment import Payment, PaymentType, normalize
from featurepulse.sdk import FeaturePulse

__all__ = [
    "AlreadyVotedError",
    "DecodingError",
    "FeatureRequest",
    "FeatureRequestStatus",
    "FeaturePulse",
    "FeaturePulseAPI",
    "FeaturePulseError",
    "InvalidResponseError",
    "InvalidURLError",
    "MissingAPIKeyError",
    "NetworkError",
    "Payment",
    "PaymentRequiredError",
    "PaymentType",
    "SDKConfig",
    "ServerError",
    "normalize",
]

__version__ = "0.1.0"
