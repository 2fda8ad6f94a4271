"""Lambda handler for transcript chat — triggered by API Gateway.

Thin wrapper around ChatPipeline. All business logic lives in src/tuberag/.
Status codes: 400 for bad input, 404 when the search found nothing, 500
when a store or provider failed.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from tuberag.builder import build_pipeline
from tuberag.config import load_settings
from tuberag.exceptions import InvalidQueryError, TubeRAGError
from tuberag.llm.base import ChatTurn
from tuberag.pipeline.chat import ChatPipeline
from tuberag.pipeline.schemas import ChatResponse

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))

# Initialize outside handler for Lambda warm-start reuse
_pipeline: ChatPipeline | None = None


def _get_pipeline() -> ChatPipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = build_pipeline(load_settings())
    return _pipeline


def _response(status: int, body: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def _serialize(response: ChatResponse) -> dict[str, Any]:
    return {
        "question": response.question,
        "answer": response.answer,
        "citations": [
            {
                "timestamp": c.timestamp,
                "seconds": c.seconds,
                "video_id": c.video_id,
                "video_title": c.video_title,
                "url": c.url,
            }
            for c in response.citations
        ],
        "model": response.model,
        "retrieval_count": response.retrieval_count,
        "video_count": response.video_count,
    }


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle API Gateway request — parse, run pipeline, map errors to status."""
    try:
        body = json.loads(event.get("body") or "{}")
    except (json.JSONDecodeError, TypeError):
        body = {}

    question = body.get("question", "")
    video_id = body.get("video_id")
    channel_id = body.get("channel_id")

    if not question or not (video_id or channel_id):
        return _response(400, {"error": "Missing 'question' and 'video_id' or 'channel_id'"})

    history = [
        ChatTurn(role=turn.get("role", "user"), content=turn.get("content", ""))
        for turn in body.get("history", [])
    ]

    pipeline = _get_pipeline()
    try:
        if channel_id:
            response = pipeline.ask_channel(channel_id, question, history=history)
        else:
            response = pipeline.ask_video(
                video_id, question, history=history, top_k=body.get("top_k")
            )
    except InvalidQueryError as exc:
        return _response(400, {"error": str(exc)})
    except TubeRAGError:
        logger.exception("Chat request failed")
        return _response(500, {"error": "Internal error while searching transcripts"})

    if response.retrieval_count == 0:
        return _response(404, {"error": "No relevant content found", "answer": response.answer})

    return _response(200, _serialize(response))
