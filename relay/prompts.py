"""System and user prompts for each AI request type."""

from typing import Literal

RequestType = Literal["explain", "summarize", "flashcards"]

EXPLAIN_SYSTEM = (
    "You are an expert educator. Explain concepts clearly and concisely. "
    "Use examples when helpful. Keep explanations focused and under 200 words."
)
SUMMARIZE_SYSTEM = (
    "You are an expert at summarizing content. "
    "Create clear, bullet-point summaries that capture key points."
)
FLASHCARDS_SYSTEM = (
    "You are an expert educator who creates effective study flashcards. "
    "Generate flashcards in JSON format only."
)


def build_prompts(
    request_type: RequestType, text: str, context: str | None = None
) -> tuple[str, str]:
    """Return the ``(system, user)`` prompt pair for a request."""
    if request_type == "explain":
        user = f'Explain this text in simple terms:\n\n"{text}"'
        if context:
            user += f"\n\nContext from the video notes: {context}"
        return EXPLAIN_SYSTEM, user

    if request_type == "summarize":
        return (
            SUMMARIZE_SYSTEM,
            f"Summarize the following notes into key bullet points:\n\n{text}",
        )

    if request_type == "flashcards":
        return (
            FLASHCARDS_SYSTEM,
            "Based on these notes, generate 5-8 flashcards for studying. "
            'Return ONLY a JSON array with objects containing "question" and '
            '"answer" fields. No other text.\n\n'
            f"Notes:\n{text}",
        )

    raise ValueError(f"Unknown request type: {request_type}")
