"""archsentinel — React Native New Architecture compatibility checker."""

__version__ = "0.1.0"
