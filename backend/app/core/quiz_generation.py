"""
Multiple-choice quiz generation from free text using Google Gemini.

The generator sends the teacher's source text to the model, asks for a JSON
array of questions and validates each item. Malformed output degrades to
fewer (or zero) questions; transport and API failures raise
QuizGenerationError.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional, Protocol

import google.generativeai as genai
from google.generativeai.types import GenerationConfig
from pydantic import BaseModel, Field, ValidationError, model_validator

from app.core.config import settings

logger = logging.getLogger(__name__)

QUESTION_LIST_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "id": {"type": "integer"},
            "text": {"type": "string"},
            "options": {"type": "array", "items": {"type": "string"}},
            "correctAnswerIndex": {
                "type": "integer",
                "description": "Zero-based index of the correct option",
            },
        },
        "required": ["text", "options", "correctAnswerIndex"],
    },
}

QUIZ_PROMPT_TEMPLATE = """
You are an expert teacher. Create a multiple-choice quiz based on the text content provided below.
Generate at least {min_questions} questions.

Content:
{content}

The output must be a valid JSON array of objects.
"""


class QuizGenerationError(Exception):
    """Raised when questions cannot be obtained from the model."""


class GeneratedQuestion(BaseModel):
    """A validated multiple-choice question as returned by the model."""

    id: int = Field(default=0, description="Question number within the quiz")
    text: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=2)
    correct_answer_index: int = Field(
        ...,
        ge=0,
        alias="correctAnswerIndex",
        description="Zero-based index of the correct option",
    )

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def validate_answer_in_options(self) -> "GeneratedQuestion":
        if self.correct_answer_index >= len(self.options):
            raise ValueError(
                f"correctAnswerIndex {self.correct_answer_index} out of range "
                f"for {len(self.options)} options"
            )
        return self


class CompletionProvider(Protocol):
    """Something that turns a prompt into raw JSON text."""

    def generate_json(self, prompt: str, response_schema: Dict[str, Any]) -> str:
        ...


class GeminiQuizProvider:
    """Google Generative AI integration for quiz generation."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.7,
        max_output_tokens: int = 8192,
    ):
        """
        Initialize Gemini provider.

        Args:
            api_key: Google API key
            model: Model to use (default: gemini-2.5-flash)
            temperature: Sampling temperature (0.0 to 2.0)
            max_output_tokens: Maximum tokens to generate
        """
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        genai.configure(api_key=api_key)
        self.client = genai.GenerativeModel(model)

    def generate_json(self, prompt: str, response_schema: Dict[str, Any]) -> str:
        """
        Generate a JSON completion.

        The schema is appended to the prompt; JSON output is requested
        through the response MIME type.

        Returns:
            Raw response text (empty string if the model returned nothing)
        """
        json_prompt = (
            f"{prompt}\n"
            f"Respond with valid JSON matching this schema: {json.dumps(response_schema)}"
        )
        generation_config = GenerationConfig(
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
            response_mime_type="application/json",
        )
        response = self.client.generate_content(
            json_prompt,
            generation_config=generation_config,
        )
        return response.text or ""


def strip_markdown_code_blocks(text: str) -> str:
    """
    Strip markdown code fences that LLMs often wrap around JSON.

    Returns:
        Text with the fences removed, or the original text if none found
    """
    if not text:
        return text

    pattern = r"^```(?:json)?\s*\n?(.*?)\n?```$"
    match = re.match(pattern, text.strip(), re.DOTALL)
    if match:
        return match.group(1).strip()

    return text.strip()


def parse_questions(text: str) -> List[GeneratedQuestion]:
    """
    Parse model output into validated questions.

    Unparsable output yields an empty list. Invalid items are dropped.
    Surviving questions are renumbered from 1.
    """
    cleaned = strip_markdown_code_blocks(text)
    try:
        raw = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse quiz JSON: {e}")
        return []

    if not isinstance(raw, list):
        logger.error(f"Expected a JSON array of questions, got {type(raw).__name__}")
        return []

    questions: List[GeneratedQuestion] = []
    for position, item in enumerate(raw):
        try:
            questions.append(GeneratedQuestion.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Dropping invalid generated question #{position}: {e}")

    return [
        q.model_copy(update={"id": number})
        for number, q in enumerate(questions, start=1)
    ]


class QuizGenerator:
    """Builds the quiz prompt and parses the provider's answer."""

    def __init__(
        self,
        provider: Optional[CompletionProvider] = None,
        max_source_chars: Optional[int] = None,
        min_questions: Optional[int] = None,
    ):
        self._provider = provider
        if max_source_chars is None:
            max_source_chars = settings.QUIZ_MAX_SOURCE_CHARS
        if min_questions is None:
            min_questions = settings.QUIZ_MIN_QUESTIONS
        self.max_source_chars = max_source_chars
        self.min_questions = min_questions

    @property
    def provider(self) -> CompletionProvider:
        if self._provider is None:
            if not settings.GEMINI_API_KEY:
                raise QuizGenerationError("API key is missing")
            self._provider = GeminiQuizProvider(
                api_key=settings.GEMINI_API_KEY,
                model=settings.GEMINI_MODEL,
                temperature=settings.GEMINI_TEMPERATURE,
                max_output_tokens=settings.GEMINI_MAX_OUTPUT_TOKENS,
            )
        return self._provider

    def build_prompt(self, content: str) -> str:
        return QUIZ_PROMPT_TEMPLATE.format(
            min_questions=self.min_questions,
            content=content[: self.max_source_chars],
        )

    def generate(self, content: str) -> List[GeneratedQuestion]:
        """
        Generate multiple-choice questions from source text.

        Args:
            content: Free text the quiz is based on

        Returns:
            Validated questions; empty if the model produced nothing usable

        Raises:
            QuizGenerationError: If no API key is configured or the model call fails
        """
        provider = self.provider
        prompt = self.build_prompt(content)
        try:
            text = provider.generate_json(prompt, QUESTION_LIST_SCHEMA)
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise QuizGenerationError(
                "Failed to generate quiz. Please try again."
            ) from e

        if not text:
            return []

        questions = parse_questions(text)
        logger.info(
            f"Generated {len(questions)} questions from {len(content)} characters"
        )
        return questions
