from featurepulse.store.feature_request_store import FeatureRequestStore

__all__ = ["FeatureRequestStore"]
