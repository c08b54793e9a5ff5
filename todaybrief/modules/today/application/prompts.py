"""Instruction prompts for generated "today" content.

Every category prompt asks for a strict JSON array of ``{title, content}``
objects. Unknown tags map to ``EMPTY_RESULT_PROMPT``.
"""

from typing import Final

from todaybrief.modules.today.domain.entities import Category

EMPTY_RESULT_PROMPT: Final[str] = "[]"

_OUTPUT_RULES: Final[str] = """
조건:
- 배열 형태의 JSON만 출력한다.
- 각 요소는 { "title": string, "content": string } 형식이며 다른 키는 넣지 않는다.
- 설명 문장, 코드 블록(```) 등 JSON 이외의 문자는 절대 출력하지 마라.
"""

_CATEGORY_INSTRUCTIONS: Final[dict[Category, str]] = {
    Category.LUCK: (
        "너는 JSON만 출력하는 생성기다.\n"
        "오늘의 운세를 띠별로 5개 만들어라. title은 띠 이름, content는 2~3문장의 운세다."
    ),
    Category.JOKES: (
        "너는 JSON만 출력하는 생성기다.\n"
        "가볍게 웃을 수 있는 한국어 유머를 5개 만들어라. title은 짧은 제목, content는 유머 본문이다."
    ),
    Category.STOCKS: (
        "너는 JSON만 출력하는 생성기다.\n"
        "오늘 주식 시장에서 주목할 만한 이슈를 5개 정리해라. title은 종목 또는 이슈 이름, "
        "content는 2~3문장 요약이다. 투자 권유 문장은 쓰지 마라."
    ),
    Category.NEWS: (
        "너는 JSON만 출력하는 생성기다.\n"
        "오늘의 주요 뉴스를 5개 정리해라. title은 기사 제목, content는 2~3문장 요약이다."
    ),
}

_MOTOR_PROMPT_TEMPLATE: Final[str] = """너는 오직 JSON 배열만 출력하는 "모터 명령 해석기"이다. 입력으로 들어오는 value="<message>" 문자열은 음성을 텍스트로 변환한 결과이다.
너는 이 텍스트를 분석해 모터를 몇 도로 이동해야 하는지 angle 값을 계산한다.

규칙:
- 출력은 반드시 JSON 배열만 가능하며, 다른 어떤 글자도 출력해선 안 된다.
- 배열에는 정확히 한 개의 요소만 넣고, 그 요소는 반드시 { "title": string, "angle": int } 형식을 따른다.
- 텍스트 안에 "몇 도", "몇도로", "각도", "회전" 같은 이동 지시가 있으면 해당 숫자를 angle로 설정한다.
- 명확한 숫자가 없어도 사전에 정한 명령어(예: "짝수" → 90도)를 인식해서 angle을 반환해야 한다.
- 이동 지시가 전혀 없다면 명령 규칙에 기반하여 angle 값을 추론해 반환한다.
- angle 값이 없을 수는 없으며 반드시 정수(int)로 포함되어야 한다.
- JSON 외의 문자열, 코드블록, 설명, 안내 문구는 절대 출력하지 마라.
value="{message}\""""


def build_category_prompt(category: Category | str) -> str:
    """Return the instruction for ``category``, or ``"[]"`` for unknown tags."""
    parsed = Category.parse(category)
    if parsed is None:
        return EMPTY_RESULT_PROMPT
    return f"{_CATEGORY_INSTRUCTIONS[parsed]}\n{_OUTPUT_RULES}"


def build_motor_prompt(message: str) -> str:
    """Embed a transcribed utterance in the motor interpreter instruction."""
    return _MOTOR_PROMPT_TEMPLATE.replace("{message}", message.replace('"', "'"))
