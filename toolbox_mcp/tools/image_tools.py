from __future__ import annotations

import logging
from typing import Optional

from mcp import types
from pydantic import Field

from ..envelope import describe_error, image_envelope, text_envelope
from ..image_client import ImageClient
from ..registry import ToolRegistry
from ..validation import ToolInput

logger = logging.getLogger(__name__)

MISSING_TOKEN_MESSAGE = (
    "오류: Hugging Face API 토큰이 설정되지 않았습니다. "
    "configSchema의 hf_token 또는 HF_TOKEN 환경변수를 설정해주세요."
)


class GenerateImageInput(ToolInput):
    prompt: str = Field(
        description=(
            '생성할 이미지에 대한 설명 (예: "Astronaut riding a horse", '
            '"A beautiful sunset over mountains")'
        ),
    )


async def _handle_generate_image(
    image_client: Optional[ImageClient],
    args: GenerateImageInput,
) -> types.CallToolResult:
    if image_client is None:
        return text_envelope(MISSING_TOKEN_MESSAGE)

    try:
        png = await image_client.generate_png(args.prompt)
    except Exception as e:
        logger.warning("generate-image failed: %s", describe_error(e))
        return text_envelope(
            f"오류: 이미지 생성 중 문제가 발생했습니다. {describe_error(e)}"
        )
    return image_envelope(png, mime_type="image/png", priority=0.9)


def register_tools(
    registry: ToolRegistry,
    image_client: Optional[ImageClient],
) -> None:
    registry.add_tool(
        name="generate-image",
        description=(
            "텍스트 프롬프트를 입력받아 AI 이미지를 생성합니다. "
            "(FLUX.1-schnell 모델 사용)"
        ),
        input_model=GenerateImageInput,
        handler=lambda args: _handle_generate_image(image_client, args),
    )
