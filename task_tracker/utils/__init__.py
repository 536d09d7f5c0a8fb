"""Utility modules for the task tracker."""

from task_tracker.utils.http import HTTPClient, HTTPResponse
from task_tracker.utils.logger import configure_logging

__all__ = ["HTTPClient", "HTTPResponse", "configure_logging"]
