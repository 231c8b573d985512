"""Invocation channels used to reach the tx-sitter functions."""

from .lambda_utility import (
    HttpInvokeUtility,
    InvocationChannel,
    LambdaUtility,
    channel_from_config,
)

__all__ = ["HttpInvokeUtility", "InvocationChannel", "LambdaUtility", "channel_from_config"]
