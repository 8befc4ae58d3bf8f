from featurepulse.config.sdk_config import SDKConfig

__all__ = ["SDKConfig"]
