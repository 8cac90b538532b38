"""x-novel domain models - re-exports all public model classes.

The models are organized by API resource:
    - envelope.py     - The ``{code, message, data}`` response wrapper
    - device.py       - Device identity and server-side preferences
    - project.py      - Novel projects, architecture, export
    - chapter.py      - Chapters and their blueprint slots
    - model_config.py - LLM model configurations and providers
    - chat.py         - Conversations and messages
    - writing.py      - Writing-assistant requests
    - graph.py        - Character relationship graph
    - review.py       - Error detection, review scores, market prediction
    - backup.py       - Backup preview and import results
    - stream.py       - Streaming frames and results

If you add a new model class, remember to add it to ``__all__`` too.
"""

from __future__ import annotations

from src.models.backup import BackupPreview, ImportResult
from src.models.chapter import (
    Chapter,
    ChapterList,
    ChapterStatus,
    CreateChapterRequest,
    UpdateChapterRequest,
)
from src.models.chat import (
    ChatMessage,
    ChatMode,
    Conversation,
    ConversationList,
    CreateConversationRequest,
    MessageRole,
    SendMessageResponse,
)
from src.models.device import Device, DeviceSettings, Theme, UpdateDeviceSettingsRequest
from src.models.envelope import Envelope, ErrorDetail
from src.models.graph import GraphData, GraphEdge, GraphNode, GraphSnapshot
from src.models.model_config import (
    CreateModelConfigRequest,
    ModelConfig,
    ModelConfigList,
    ModelProvider,
    UpdateModelConfigRequest,
    ValidateModelConfigRequest,
)
from src.models.project import (
    CreateProjectRequest,
    ExportFormat,
    ExportResult,
    Project,
    ProjectList,
    ProjectStatus,
    UpdateProjectRequest,
)
from src.models.review import (
    DetectionIssue,
    DetectionResult,
    DetectionType,
    MarketPrediction,
    ReviewResult,
    ReviewScore,
)
from src.models.stream import FrameKind, StreamFrame, StreamResult
from src.models.writing import (
    PolishStyle,
    SuggestionAspect,
    WritingAction,
    WritingAssistantRequest,
    WritingResult,
)

__all__ = [
    "BackupPreview",
    "Chapter",
    "ChapterList",
    "ChapterStatus",
    "ChatMessage",
    "ChatMode",
    "Conversation",
    "ConversationList",
    "CreateChapterRequest",
    "CreateConversationRequest",
    "CreateModelConfigRequest",
    "CreateProjectRequest",
    "DetectionIssue",
    "DetectionResult",
    "DetectionType",
    "Device",
    "DeviceSettings",
    "Envelope",
    "ErrorDetail",
    "ExportFormat",
    "ExportResult",
    "FrameKind",
    "GraphData",
    "GraphEdge",
    "GraphNode",
    "GraphSnapshot",
    "ImportResult",
    "MarketPrediction",
    "MessageRole",
    "ModelConfig",
    "ModelConfigList",
    "ModelProvider",
    "PolishStyle",
    "Project",
    "ProjectList",
    "ProjectStatus",
    "ReviewResult",
    "ReviewScore",
    "SendMessageResponse",
    "StreamFrame",
    "StreamResult",
    "SuggestionAspect",
    "Theme",
    "UpdateChapterRequest",
    "UpdateDeviceSettingsRequest",
    "UpdateModelConfigRequest",
    "UpdateProjectRequest",
    "ValidateModelConfigRequest",
    "WritingAction",
    "WritingAssistantRequest",
    "WritingResult",
]
