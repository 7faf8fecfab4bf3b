from tradelog.app import TradeLogApp, create_app

__version__ = "0.1.0"

__all__ = ["TradeLogApp", "create_app", "__version__"]
