"""JSON Lines log of word detail generations."""
import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

RAW_OUTPUT_LIMIT = 2000  # characters of model output kept per entry


class GenerationLogger:
    """Appends one JSON object per generation call to a .jsonl file."""

    def __init__(self, log_file_path: str = "logs/generations.jsonl"):
        """
        Initialize the generation logger.

        Args:
            log_file_path: Destination file; parent directories are created
        """
        self.log_file_path = Path(log_file_path)
        self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._file = open(self.log_file_path, "a", encoding="utf-8")
        logger.info(f"GenerationLogger writing to {self.log_file_path}")

    def log_generation(
        self,
        words: List[str],
        model_used: str,
        outcome: str,
        latency_ms: int = 0,
        tokens_input: int = 0,
        tokens_output: int = 0,
        raw_output: Optional[str] = None,
        error_code: Optional[str] = None,
        placeholder_fields: int = 0
    ) -> Dict[str, Any]:
        """
        Record a single generation.

        Args:
            words: Input words in request order
            model_used: Model name the request was sent to
            outcome: "success" or the FailureReason value that was applied
            latency_ms: Model call latency
            tokens_input: Prompt tokens reported by the API
            tokens_output: Completion tokens reported by the API
            raw_output: Raw model text, truncated before writing
            error_code: Structured LLM error code when the call raised
            placeholder_fields: Number of fields filled with placeholder text

        Returns:
            The entry that was written
        """
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "words": list(words),
            "word_count": len(words),
            "model_used": model_used,
            "outcome": outcome,
            "latency_ms": latency_ms,
            "tokens_input": tokens_input,
            "tokens_output": tokens_output,
            "raw_output": raw_output[:RAW_OUTPUT_LIMIT] if raw_output else None,
            "error_code": error_code,
            "placeholder_fields": placeholder_fields,
        }

        with self._lock:
            self._file.write(json.dumps(entry, ensure_ascii=False) + "\n")
            self._file.flush()

        return entry

    def close(self) -> None:
        """Close the underlying file."""
        with self._lock:
            if not self._file.closed:
                self._file.close()
