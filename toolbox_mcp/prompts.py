from __future__ import annotations

from typing import List, Optional

from mcp import types
from pydantic import Field

from .registry import PromptRegistry
from .validation import ToolInput

CODE_REVIEW_TEMPLATE = """다음 {lang} 코드를 리뷰해주세요:

```{fence}
{code}
```
{focus_area}

다음 항목들을 포함하여 종합적인 코드 리뷰를 제공해주세요:

1. **코드 품질 평가**
   - 코드의 전반적인 품질과 구조
   - 명명 규칙 및 코딩 컨벤션 준수 여부

2. **잠재적 버그 및 오류**
   - 논리적 오류나 엣지 케이스
   - 타입 관련 문제

3. **성능 고려사항**
   - 시간/공간 복잡도
   - 최적화 가능한 부분

4. **보안 취약점**
   - 입력 검증
   - 민감한 데이터 처리

5. **개선 제안**
   - 리팩토링 제안
   - 더 나은 패턴이나 라이브러리 활용

6. **베스트 프랙티스**
   - 해당 언어/프레임워크의 권장 사항
   - 테스트 가능성"""


class CodeReviewArgs(ToolInput):
    code: str = Field(description="리뷰할 코드")
    language: Optional[str] = Field(
        default=None,
        description="프로그래밍 언어 (예: javascript, python, typescript)",
    )
    focus: Optional[str] = Field(
        default=None,
        description="집중할 영역 (예: 성능, 보안, 가독성)",
    )


def render_code_review(
    code: str,
    language: Optional[str] = None,
    focus: Optional[str] = None,
) -> str:
    focus_area = f"\n\n특히 다음 영역에 집중해서 리뷰해주세요: {focus}" if focus else ""
    return CODE_REVIEW_TEMPLATE.format(
        lang=language or "코드",
        fence=language or "",
        code=code,
        focus_area=focus_area,
    )


def code_review_messages(args: CodeReviewArgs) -> List[types.PromptMessage]:
    text = render_code_review(args.code, args.language, args.focus)
    return [
        types.PromptMessage(
            role="user",
            content=types.TextContent(type="text", text=text),
        )
    ]


def register_prompts(registry: PromptRegistry) -> None:
    registry.add_prompt(
        name="code-review",
        title="코드 리뷰",
        description="코드를 입력받아 종합적인 코드 리뷰를 위한 프롬프트를 생성합니다.",
        args_model=CodeReviewArgs,
        template=code_review_messages,
    )
