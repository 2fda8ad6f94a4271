"""Answer assembly — prompts, timestamp citations, chat pipeline."""

from tuberag.pipeline.chat import ChatPipeline
from tuberag.pipeline.schemas import ChatResponse, Citation

__all__ = ["ChatPipeline", "ChatResponse", "Citation"]
