"""Application facade exports for stable use-case API."""

from mkctl.application.kubectl_use_case import complete_kubectl, execute_kubectl
from mkctl.application.result_translator import ExitDecision

__all__ = [
    "complete_kubectl",
    "execute_kubectl",
    "ExitDecision",
]
