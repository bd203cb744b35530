"""
Resource APIs - thin wrappers that shape requests and decode responses.
"""

from metriqual.api.analytics import AnalyticsAPI
from metriqual.api.audio import AudioAPI
from metriqual.api.chat import ChatAPI
from metriqual.api.embeddings import EmbeddingsAPI
from metriqual.api.images import ImagesAPI
from metriqual.api.models import ModelsAPI
from metriqual.api.organizations import OrganizationsAPI
from metriqual.api.proxy_keys import ProxyKeysAPI
from metriqual.api.video import VideoAPI
from metriqual.api.webhooks import WebhooksAPI

__all__ = [
    "AnalyticsAPI",
    "AudioAPI",
    "ChatAPI",
    "EmbeddingsAPI",
    "ImagesAPI",
    "ModelsAPI",
    "OrganizationsAPI",
    "ProxyKeysAPI",
    "VideoAPI",
    "WebhooksAPI",
]
