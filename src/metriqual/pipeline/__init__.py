"""
Pipeline - decoding of streamed gateway responses.
"""

from metriqual.pipeline.decode import SSELineDecoder

__all__ = ["SSELineDecoder"]
