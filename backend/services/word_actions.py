"""Speak, copy and share actions for a single word card."""
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from config import TARGET_LANGUAGE
from models.notification import Notification
from models.word import WordDetail

logger = logging.getLogger(__name__)

SPEECH_LANG = "en-US"


@dataclass
class SharePayload:
    """Data handed to a platform share sheet."""
    title: str
    text: str
    url: Optional[str] = None


class HostCapabilities(Protocol):
    """Platform features provided by the host (a browser, a test double, ...).

    A capability that the host does not support should raise
    NotImplementedError.
    """

    def speak(self, text: str, lang: str) -> None: ...

    def copy(self, text: str) -> None: ...

    def share(self, payload: SharePayload) -> None: ...


def clipboard_text(detail: WordDetail, language: str = TARGET_LANGUAGE) -> str:
    """Plain-text rendering of a card used for copy and share."""
    return (
        f"Word: {detail.word}\n"
        f"Sentence: {detail.sentence}\n"
        f"Pronunciation: {detail.pronunciation}\n"
        f"{language} Meaning: {detail.meaning}"
    )


def share_payload(detail: WordDetail, url: Optional[str] = None, language: str = TARGET_LANGUAGE) -> SharePayload:
    return SharePayload(
        title=f"LexiDaily: {detail.word}",
        text=clipboard_text(detail, language),
        url=url
    )


class WordActions:
    """Runs card actions through injected host capabilities.

    Every action returns a Notification; host errors never propagate.
    """

    def __init__(self, capabilities: Optional[HostCapabilities], language: str = TARGET_LANGUAGE):
        self.capabilities = capabilities
        self.language = language

    def speak(self, detail: WordDetail) -> Notification:
        try:
            self._require().speak(detail.word, SPEECH_LANG)
        except NotImplementedError:
            return Notification(
                title="Pronunciation Unavailable",
                description="Text-to-speech is not supported in your browser.",
                variant="destructive"
            )
        except Exception as e:
            logger.error(f"Speech failed for '{detail.word}': {e}")
            return Notification(
                title="Pronunciation Failed",
                description=f"Could not play the pronunciation of {detail.word}.",
                variant="destructive"
            )
        return Notification(title="Playing Pronunciation", description=detail.word)

    def copy(self, detail: WordDetail) -> Notification:
        try:
            self._require().copy(clipboard_text(detail, self.language))
        except NotImplementedError:
            return Notification(
                title="Copy Unavailable",
                description="Clipboard access is not supported in your browser.",
                variant="destructive"
            )
        except Exception as e:
            logger.error(f"Copy failed for '{detail.word}': {e}")
            return Notification(
                title="Copy Failed",
                description=f"Failed to copy: {e}. Try manually.",
                variant="destructive"
            )
        return Notification(
            title="Copied to Clipboard",
            description=f"Details for \"{detail.word}\" copied."
        )

    def share(self, detail: WordDetail, url: Optional[str] = None) -> Notification:
        try:
            self._require().share(share_payload(detail, url, self.language))
        except NotImplementedError:
            return Notification(
                title="Sharing Unavailable",
                description="Sharing is not supported here. The details can be copied instead.",
                variant="destructive"
            )
        except Exception as e:
            logger.error(f"Share failed for '{detail.word}': {e}")
            return Notification(
                title="Share Failed",
                description="Could not share this word. Please try again.",
                variant="destructive"
            )
        return Notification(title="Shared", description=f"\"{detail.word}\" was shared.")

    def _require(self) -> HostCapabilities:
        if self.capabilities is None:
            raise NotImplementedError("no host capabilities configured")
        return self.capabilities
