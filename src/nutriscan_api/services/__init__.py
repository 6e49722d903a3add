"""Business logic services for the NutriScan API."""

from .chat import ChatExchange, ChatService
from .conversation import ConversationContext
from .prompt_composer import PromptComposer
from .scan_pipeline import ScanOutcome, ScanPipelineCoordinator
from .storage import GridFSImageStorage

__all__ = [
    "ChatExchange",
    "ChatService",
    "ConversationContext",
    "GridFSImageStorage",
    "PromptComposer",
    "ScanOutcome",
    "ScanPipelineCoordinator",
]
