import pytest

from toolbox_mcp.prompts import render_code_review
from toolbox_mcp.validation import ToolInputError

SECTIONS = [
    "1. **코드 품질 평가**",
    "2. **잠재적 버그 및 오류**",
    "3. **성능 고려사항**",
    "4. **보안 취약점**",
    "5. **개선 제안**",
    "6. **베스트 프랙티스**",
]


def test_template_with_language_and_focus():
    text = render_code_review("print('hi')", language="python", focus="보안")

    assert text.startswith("다음 python 코드를 리뷰해주세요:\n\n```python\nprint('hi')\n```\n")
    assert "특히 다음 영역에 집중해서 리뷰해주세요: 보안" in text
    for section in SECTIONS:
        assert section in text


def test_template_without_hints():
    text = render_code_review("x = {a}")

    assert text.startswith("다음 코드 코드를 리뷰해주세요:\n\n```\nx = {a}\n```\n\n\n다음 항목들을")
    assert "집중해서" not in text


def test_rendering_is_deterministic():
    assert render_code_review("a", "go", "성능") == render_code_review("a", "go", "성능")


@pytest.mark.asyncio
async def test_get_prompt_returns_single_user_message(toolbox):
    result = await toolbox.get_prompt(
        "code-review", {"code": "fn main() {}", "language": "rust"}
    )

    [message] = result.messages
    assert message.role == "user"
    assert message.content.type == "text"
    assert message.content.text == render_code_review("fn main() {}", "rust")


@pytest.mark.asyncio
async def test_get_prompt_requires_code(toolbox):
    with pytest.raises(ToolInputError):
        await toolbox.get_prompt("code-review", {"language": "rust"})


@pytest.mark.asyncio
async def test_prompt_listing(toolbox):
    [prompt] = await toolbox.list_prompts()
    assert prompt.name == "code-review"
    assert prompt.title == "코드 리뷰"
