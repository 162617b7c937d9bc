"""Advice prompt assembly and user-facing failure messages."""

from shared_types import ErrorKind

from .models import JournalSnapshot, Persona

ADVICE_PROMPT = "{template}\n\n사용자의 저널: {journal}\n\n사용자의 회고: {reflection}"

FAILURE_TITLE = "API 오류"

FAILURE_MESSAGES = {
    ErrorKind.PROTOCOL: "조언을 불러오는 데 실패했습니다. API 키가 올바른지 확인해주세요.",
    ErrorKind.TRANSPORT: "네트워크 오류로 조언을 불러오지 못했습니다. 잠시 후 다시 시도해주세요.",
    ErrorKind.EMPTY_RESPONSE: "코칭 조언을 가져오는 중 오류가 발생했습니다.",
    ErrorKind.UNKNOWN: "코칭 조언을 가져오는 중 오류가 발생했습니다.",
}


def build_advice_prompt(persona: Persona, snapshot: JournalSnapshot) -> str:
    return ADVICE_PROMPT.format(
        template=persona.prompt_template,
        journal=snapshot.journal_text,
        reflection=snapshot.reflection_text,
    )


def failure_message(kind: ErrorKind) -> str:
    return FAILURE_MESSAGES.get(kind, FAILURE_MESSAGES[ErrorKind.UNKNOWN])
