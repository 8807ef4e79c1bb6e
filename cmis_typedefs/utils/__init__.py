from .logging_utils import PACKAGE_LOGGER_NAME, configure_split_stream_logging

__all__ = ["PACKAGE_LOGGER_NAME", "configure_split_stream_logging"]
