"""
Word detail generation for LexiDaily.

Turns a list of words into example sentences, localized meanings and
pronunciation guides with a single language-model call. Model output is
validated against a fixed schema before any field is trusted; every failure
path degrades to placeholder text so callers always receive one record per
requested word.
"""

import json
import logging
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from config import GENERATION_MODEL, GENERATION_MAX_TOKENS, TARGET_LANGUAGE
from models.word import (
    WordDetail,
    FailureReason,
    RawWordDetail,
    GenerationPayload,
    placeholder_for,
)
from services.llm_client import LLMClient, LLMClientError, LLMResponse
from services.generation_logger import GenerationLogger

logger = logging.getLogger(__name__)

RECORDS_FIELD = "wordDetails"
DETAIL_FIELDS = ("sentence", "meaning", "pronunciation")


class WordDetailGenerator:
    """Generates one WordDetail per input word, never raising to the caller."""

    PROMPT_TEMPLATE = """You generate example sentences, {language} meanings and pronunciation guides for English words.

For each word in the following list, provide:
1. An example sentence that clearly demonstrates the meaning of the word.
2. The {language} meaning of the word, written in {language}.
3. A simple, human-readable pronunciation guide (for example "i-FEM-er-uhl").

List of words:
{word_list}

Return a JSON object with a single key "{records_field}" whose value is an array
with exactly one object per word, in the same order as the list. Each object has
the string fields "word", "sentence", "meaning" and "pronunciation".
Example for a single word "ephemeral":
{{
  "{records_field}": [
    {{
      "word": "ephemeral",
      "sentence": "The beauty of the cherry blossoms is ephemeral, lasting only a few weeks.",
      "meaning": "{example_meaning}",
      "pronunciation": "i-FEM-er-uhl"
    }}
  ]
}}"""

    EXAMPLE_MEANINGS = {"Hindi": "क्षणिक"}

    def __init__(
        self,
        llm_client: Optional[LLMClient],
        model: str = GENERATION_MODEL,
        language: str = TARGET_LANGUAGE,
        max_tokens: int = GENERATION_MAX_TOKENS,
        generation_logger: Optional[GenerationLogger] = None
    ):
        """
        Initialize the generator.

        Args:
            llm_client: Client used for the model call; None means generation
                is unavailable and every request gets placeholder records
            model: Model name to request
            language: Target language for the meaning field
            max_tokens: Completion budget for one call
            generation_logger: Optional JSON Lines sink for diagnostics
        """
        self.llm_client = llm_client
        self.model = model
        self.language = language
        self.max_tokens = max_tokens
        self.generation_logger = generation_logger

    def build_prompt(self, words: List[str]) -> str:
        """Embed the full word list and the output shape into one prompt."""
        word_list = "\n".join(f"- {word}" for word in words)
        return self.PROMPT_TEMPLATE.format(
            language=self.language,
            word_list=word_list,
            records_field=RECORDS_FIELD,
            example_meaning=self.EXAMPLE_MEANINGS.get(self.language, "short-lived")
        )

    def generate(self, words: List[str]) -> List[WordDetail]:
        """
        Generate details for every word.

        Args:
            words: Ordered input words

        Returns:
            Exactly len(words) WordDetail records in input order
        """
        words = list(words)
        if not words:
            logger.warning("generate() called with no words")
            return []

        logger.info(f"Generating details for {len(words)} words: {words}")

        if self.llm_client is None:
            logger.warning("No LLM client configured, returning placeholder details")
            self._log(words, FailureReason.UNAVAILABLE.value)
            return self._placeholders(words, FailureReason.UNAVAILABLE)

        prompt = self.build_prompt(words)

        try:
            response = self.llm_client.generate(
                model=self.model,
                prompt=prompt,
                max_tokens=self.max_tokens,
                json_mode=True
            )
        except LLMClientError as e:
            logger.error(f"Word detail generation failed: {e.error.code} {e.error.message}")
            self._log(words, FailureReason.ERROR.value, error_code=e.error.code)
            return self._placeholders(words, FailureReason.ERROR)
        except Exception as e:
            logger.error(f"Unexpected error generating word details: {e}", exc_info=True)
            self._log(words, FailureReason.ERROR.value, error_code="UNKNOWN_ERROR")
            return self._placeholders(words, FailureReason.ERROR)

        raw_text = response.text if response else None
        logger.debug(f"Raw model output: {(raw_text or '')[:500]}")

        payload = self.parse_response(raw_text)
        if payload is None:
            self._log(words, FailureReason.UNAVAILABLE.value, response=response)
            return self._placeholders(words, FailureReason.UNAVAILABLE)

        details, placeholder_fields = self._align(words, payload.word_details)
        self._log(words, "success", response=response, placeholder_fields=placeholder_fields)

        if placeholder_fields:
            logger.warning(f"Substituted placeholders for {placeholder_fields} missing fields")
        logger.info(f"Generated details for {len(details)} words")
        return details

    @staticmethod
    def parse_response(text: Optional[str]) -> Optional[GenerationPayload]:
        """
        Validate raw model text against the expected payload shape.

        Returns:
            GenerationPayload with a non-empty record list, or None when the
            text is absent, not JSON, or does not match the schema
        """
        if not text or not text.strip():
            logger.warning("Model returned an empty response")
            return None

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Model response is not valid JSON: {e}")
            return None

        # Some models return the bare array despite JSON-object mode
        if isinstance(data, list):
            data = {RECORDS_FIELD: data}

        try:
            return GenerationPayload.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Model response failed schema validation: {e.error_count()} errors")
            return None

    def _align(
        self,
        words: List[str],
        records: List[RawWordDetail]
    ) -> Tuple[List[WordDetail], int]:
        """
        Re-key returned records to input order.

        For each input word: an unused record with the same word, else an
        already-used record with the same word (duplicate input), else the
        record at the same position when its word matches no input word,
        else a placeholder record.
        """
        input_keys = {_key(word) for word in words}
        by_key: Dict[str, List[int]] = {}
        for index, record in enumerate(records):
            by_key.setdefault(_key(record.word), []).append(index)

        used = set()
        details: List[WordDetail] = []
        placeholder_fields = 0

        for position, word in enumerate(words):
            candidates = by_key.get(_key(word), [])
            chosen = next((i for i in candidates if i not in used), None)
            if chosen is None and candidates:
                chosen = candidates[0]
            if chosen is None and position < len(records) and position not in used:
                if _key(records[position].word) not in input_keys:
                    chosen = position

            if chosen is None:
                logger.warning(f"Model output has no record for '{word}'")
                details.append(self._placeholder(word, FailureReason.MISSING))
                placeholder_fields += len(DETAIL_FIELDS)
                continue

            used.add(chosen)
            detail, missing = self._to_detail(word, records[chosen])
            details.append(detail)
            placeholder_fields += missing

        return details, placeholder_fields

    @staticmethod
    def _to_detail(word: str, record: RawWordDetail) -> Tuple[WordDetail, int]:
        """Map a validated record field-for-field, filling blanks."""
        values = {}
        missing = 0
        for field_name in DETAIL_FIELDS:
            value = getattr(record, field_name)
            if value is None or not value.strip():
                values[field_name] = placeholder_for(FailureReason.MISSING)
                missing += 1
            else:
                values[field_name] = value.strip()
        return WordDetail(word=word, **values), missing

    @staticmethod
    def _placeholder(word: str, reason: FailureReason) -> WordDetail:
        text = placeholder_for(reason)
        return WordDetail(word=word, sentence=text, meaning=text, pronunciation=text)

    def _placeholders(self, words: List[str], reason: FailureReason) -> List[WordDetail]:
        return [self._placeholder(word, reason) for word in words]

    def _log(
        self,
        words: List[str],
        outcome: str,
        response: Optional[LLMResponse] = None,
        error_code: Optional[str] = None,
        placeholder_fields: int = 0
    ) -> None:
        """Write a diagnostics entry; logging problems never reach the caller."""
        if self.generation_logger is None:
            return
        try:
            self.generation_logger.log_generation(
                words=words,
                model_used=self.model,
                outcome=outcome,
                latency_ms=response.latency_ms if response else 0,
                tokens_input=response.tokens_input if response else 0,
                tokens_output=response.tokens_output if response else 0,
                raw_output=response.text if response else None,
                error_code=error_code,
                placeholder_fields=placeholder_fields
            )
        except Exception as e:
            logger.error(f"Failed to write generation log entry: {e}")


def _key(word: Optional[str]) -> str:
    return (word or "").strip().lower()
