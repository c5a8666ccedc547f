from .deep_link_bridge import DeepLinkBridge
from .pending_links import PendingLinkQueue
from .single_instance import (
    SingleInstanceGuard,
    decode_argv_message,
    encode_argv_message,
    forward_arguments,
)

__all__ = [
    "DeepLinkBridge",
    "PendingLinkQueue",
    "SingleInstanceGuard",
    "decode_argv_message",
    "encode_argv_message",
    "forward_arguments",
]
