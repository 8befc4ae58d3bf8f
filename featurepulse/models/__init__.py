from featurepulse.models.feature_request import FeatureRequest, FeatureRequestStatus
from featurepulse.models.payment import Payment, PaymentType, normalize
from featurepulse.models.server_config import (
    Permissions,
    ServerConfigState,
    ServerConfiguration,
    StatusAppearance,
)
from featurepulse.models.user import User

__all__ = [
    "FeatureRequest",
    "FeatureRequestStatus",
    "Payment",
    "PaymentType",
    "Permissions",
    "ServerConfigState",
    "ServerConfiguration",
    "StatusAppearance",
    "User",
    "normalize",
]
