from typing import Sequence

from ..models.chunk import ChunkRecord

CHUNK_SEPARATOR = "\n\n---\n\n"

SYSTEM_PROMPTS = {
    "ko": """당신은 미국 세법 전문가입니다. 다음 규칙을 따라 답변해주세요:

1. 제공된 컨텍스트 정보만을 기반으로 답변하세요
2. 정확한 수치나 금액이 있다면 반드시 명시하세요
3. 2024년 기준 정보임을 명확히 하세요
4. 불확실한 정보는 "추가 확인이 필요합니다"라고 언급하세요
5. 한국어로 정확하고 친절하게 답변하세요
6. 복잡한 내용은 이해하기 쉽게 설명하세요""",
    "en": """You are a U.S. tax-law expert. Follow these rules when answering:

1. Answer only from the context information provided
2. Always state exact figures or amounts when they are available
3. Make clear that the information is based on the 2024 tax year
4. Say "this needs further confirmation" for anything uncertain
5. Answer accurately and politely in English
6. Explain complex topics in plain terms""",
}

SITUATION_LINES = {
    "ko": "추가 컨텍스트: {context}",
    "en": "Additional context: {context}",
}

CITATION_PREFIXES = {
    "ko": "[출처: {source}]",
    "en": "[Source: {source}]",
}

USER_PROMPTS = {
    "ko": """다음 정보를 바탕으로 질문에 답변해주세요:

컨텍스트:
{context}

질문: {question}""",
    "en": """Answer the question using the following information:

Context:
{context}

Question: {question}""",
}


def _localized(templates: dict[str, str], language: str) -> str:
    return templates.get(language, templates["ko"])


def build_system_prompt(language: str = "ko", context: str = "") -> str:
    """System instruction, with the caller's situation appended when given."""
    prompt = _localized(SYSTEM_PROMPTS, language)
    if context:
        prompt += "\n\n" + _localized(SITUATION_LINES, language).format(context=context)
    return prompt


def format_chunks(chunks: Sequence[ChunkRecord], language: str = "ko") -> str:
    prefix = _localized(CITATION_PREFIXES, language)
    return CHUNK_SEPARATOR.join(
        f"{prefix.format(source=chunk.source)}\n{chunk.content}" for chunk in chunks
    )


def build_user_prompt(
    question: str, chunks: Sequence[ChunkRecord], language: str = "ko"
) -> str:
    return _localized(USER_PROMPTS, language).format(
        context=format_chunks(chunks, language),
        question=question,
    )
