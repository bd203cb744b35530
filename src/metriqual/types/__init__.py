"""
Typed gateway payloads.

Wire field names are snake_case and map one-to-one onto model attributes.
Responses pass through ``decode`` so a schema mismatch raises
ResponseDecodeError instead of surfacing as a missing attribute later.
"""

from metriqual.types.analytics import (
    AnalyticsOverview,
    ModelUsage,
    ProviderStats,
    TimeseriesPoint,
    UsageAnalyticsResponse,
    UsageLog,
    UsageLogsResponse,
)
from metriqual.types.audio import (
    AsyncSpeechRequest,
    AsyncSpeechResponse,
    AsyncSpeechStatusResponse,
    CloneVoiceRequest,
    CloneVoiceResponse,
    DesignVoiceRequest,
    DesignVoiceResponse,
    GetVoicesResponse,
    PromptAudioUploadResponse,
    SpeechRequest,
    TranscriptionRequest,
    TranscriptionResponse,
    TranscriptionSegment,
    Voice,
    VoiceCloneUploadResponse,
    VoicesData,
    VoiceType,
)
from metriqual.types.base import DeleteResponse, MqlModel, decode, decode_list
from metriqual.types.chat import (
    ChatCompletionChoice,
    ChatCompletionChunk,
    ChatCompletionChunkChoice,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatDelta,
    ChatMessage,
    FunctionCall,
    FunctionDefinition,
    StreamCompletion,
    ToolCall,
    ToolDefinition,
    UsageInfo,
)
from metriqual.types.embeddings import (
    EmbeddingObject,
    EmbeddingRequest,
    EmbeddingResponse,
    EmbeddingUsage,
)
from metriqual.types.images import (
    ImageData,
    ImageGenerationRequest,
    ImageGenerationResponse,
    MinimaxImageRequest,
    MinimaxImageResponse,
    SubjectReference,
)
from metriqual.types.models import Model, ModelListResponse
from metriqual.types.organizations import (
    AcceptInviteResponse,
    CreateOrganizationRequest,
    InviteMemberRequest,
    Organization,
    OrganizationInvite,
    OrganizationMember,
    PendingInvite,
    UserOrganizationsResponse,
    UserRole,
)
from metriqual.types.proxy_keys import (
    CreateProxyKeyRequest,
    CreateProxyKeyResponse,
    ProviderConfig,
    ProviderStatus,
    ProxyKeyListItem,
    ProxyKeyListResponse,
    ProxyKeyTestRequest,
    ProxyKeyUsageResponse,
    RegenerateProxyKeyResponse,
)
from metriqual.types.video import (
    VideoDownloadResponse,
    VideoError,
    VideoGenerationRequest,
    VideoGenerationResponse,
    VideoTaskStatusResponse,
)
from metriqual.types.webhooks import (
    CreateWebhookRequest,
    UpdateWebhookRequest,
    Webhook,
    WebhookEvent,
)

__all__ = [
    "AcceptInviteResponse",
    "AnalyticsOverview",
    "AsyncSpeechRequest",
    "AsyncSpeechResponse",
    "AsyncSpeechStatusResponse",
    "ChatCompletionChoice",
    "ChatCompletionChunk",
    "ChatCompletionChunkChoice",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatDelta",
    "ChatMessage",
    "CloneVoiceRequest",
    "CloneVoiceResponse",
    "CreateOrganizationRequest",
    "CreateProxyKeyRequest",
    "CreateProxyKeyResponse",
    "CreateWebhookRequest",
    "DeleteResponse",
    "DesignVoiceRequest",
    "DesignVoiceResponse",
    "EmbeddingObject",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "EmbeddingUsage",
    "FunctionCall",
    "FunctionDefinition",
    "GetVoicesResponse",
    "ImageData",
    "ImageGenerationRequest",
    "ImageGenerationResponse",
    "InviteMemberRequest",
    "MinimaxImageRequest",
    "MinimaxImageResponse",
    "Model",
    "ModelListResponse",
    "ModelUsage",
    "MqlModel",
    "Organization",
    "OrganizationInvite",
    "OrganizationMember",
    "PendingInvite",
    "PromptAudioUploadResponse",
    "ProviderConfig",
    "ProviderStats",
    "ProviderStatus",
    "ProxyKeyListItem",
    "ProxyKeyListResponse",
    "ProxyKeyTestRequest",
    "ProxyKeyUsageResponse",
    "RegenerateProxyKeyResponse",
    "SpeechRequest",
    "StreamCompletion",
    "SubjectReference",
    "TimeseriesPoint",
    "ToolCall",
    "ToolDefinition",
    "TranscriptionRequest",
    "TranscriptionResponse",
    "TranscriptionSegment",
    "UpdateWebhookRequest",
    "UsageAnalyticsResponse",
    "UsageInfo",
    "UsageLog",
    "UsageLogsResponse",
    "UserOrganizationsResponse",
    "UserRole",
    "VideoDownloadResponse",
    "VideoError",
    "VideoGenerationRequest",
    "VideoGenerationResponse",
    "VideoTaskStatusResponse",
    "Voice",
    "VoiceCloneUploadResponse",
    "VoiceType",
    "VoicesData",
    "Webhook",
    "WebhookEvent",
    "decode",
    "decode_list",
]
