from featurepulse.api.client import FeaturePulseAPI
from featurepulse.api.network_client import NetworkClient

__all__ = ["FeaturePulseAPI", "NetworkClient"]
