"""Fixed user-facing texts, in Korean and English."""

DEFAULT_LANGUAGE = "ko"

MESSAGES: dict[str, dict[str, str]] = {
    "no_results": {
        "ko": (
            "죄송합니다. 해당 질문에 대한 관련 정보를 찾을 수 없습니다. "
            "더 구체적인 질문을 해주시거나, 일반적인 세법 관련 용어로 다시 질문해 주세요."
        ),
        "en": (
            "Sorry, I could not find relevant information for that question. "
            "Please ask a more specific question or rephrase it using common tax terms."
        ),
    },
    "generation_failed": {
        "ko": "죄송합니다. 답변 생성 중 오류가 발생했습니다. 잠시 후 다시 시도해 주세요.",
        "en": "Sorry, an error occurred while generating the answer. Please try again shortly.",
    },
    "quota_exceeded": {
        "ko": (
            "현재 OpenAI API 할당량이 초과되었습니다.\n\n"
            "OpenAI 계정의 결제 상태와 사용량 한도를 확인해주세요:\n"
            "- OpenAI 대시보드에서 Usage와 Billing 섹션을 확인\n"
            "- 결제 방법이 유효한지 확인\n"
            "- 새로운 API 키 발급을 고려해보세요\n\n"
            "세금 관련 기본 질문이 있으시면 FAQ나 도움말을 참조해주세요."
        ),
        "en": (
            "The OpenAI API quota has been exceeded.\n\n"
            "Please check the billing status and usage limits of the OpenAI account:\n"
            "- Review the Usage and Billing sections of the OpenAI dashboard\n"
            "- Make sure the payment method is valid\n"
            "- Consider issuing a new API key\n\n"
            "For basic tax questions, please refer to the FAQ or help pages."
        ),
    },
    "empty_message": {
        "ko": "메시지를 입력해주세요",
        "en": "Please enter a message",
    },
    "mobile_app": {
        "ko": (
            "EzTax는 별도의 모바일 앱 없이 웹사이트에서 제공되는 서비스입니다. "
            "PC나 모바일 브라우저에서 바로 접속해 모든 기능을 사용할 수 있습니다."
        ),
        "en": (
            "EzTax is a website, not a separate mobile app. "
            "Every feature is available directly from a desktop or mobile browser."
        ),
    },
    "irs_submission": {
        "ko": (
            "EzTax는 세금 신고 시뮬레이션 서비스로, IRS에 신고서를 직접 제출(e-file)하지 않습니다. "
            "검토 페이지에서 Form 1040 PDF를 생성하신 뒤 직접 제출하시거나 "
            "세무 전문가를 통해 신고해 주세요."
        ),
        "en": (
            "EzTax is a tax-filing simulator and does not submit (e-file) returns to the IRS. "
            "Generate the Form 1040 PDF on the Review page, then file it yourself "
            "or through a tax professional."
        ),
    },
}


def get_message(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Look up a fixed message, falling back to Korean for unknown languages."""
    variants = MESSAGES[key]
    return variants.get(language, variants[DEFAULT_LANGUAGE])
